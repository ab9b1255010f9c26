# tests/test_report_log.py
"""Unit tests for the per-area report log (pruning + persistence)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json
import pytest
from unittest.mock import MagicMock
from app.errors import InvalidLevel, PersistenceReadFailure, PersistenceWriteFailure
from app.services.activity_report import ActivityLevel, ActivityReport
from app.services.kv_store import MemoryKeyValueStore
from app.services.report_log import ReportLog

T0 = 1_700_000_000_000
MIN = 60_000
KEY = "activity_reports:pickleball"


def make_report(level=ActivityLevel.BUSY, observed_at=T0):
    return ActivityReport(area_id="pickleball", level=level, observed_at=observed_at)


class TestAppend:
    @pytest.mark.asyncio
    async def test_append_persists_sequence(self):
        store = MemoryKeyValueStore()
        log = ReportLog("pickleball", store)

        await log.append(make_report())

        assert json.loads(store.get(KEY)) == [{"level": 3, "observed_at": T0}]

    @pytest.mark.asyncio
    async def test_append_prunes_stale_reports(self):
        store = MemoryKeyValueStore()
        log = ReportLog("pickleball", store)

        await log.append(make_report(ActivityLevel.BUSY, T0))
        await log.append(make_report(ActivityLevel.MEDIUM, T0 + 30 * MIN))
        await log.append(make_report(ActivityLevel.LIGHT, T0 + 50 * MIN))

        assert len(log) == 2
        assert [r["level"] for r in json.loads(store.get(KEY))] == [2, 1]

    @pytest.mark.asyncio
    async def test_invalid_level_leaves_log_untouched(self):
        store = MagicMock()
        log = ReportLog("pickleball", store)

        with pytest.raises(InvalidLevel):
            await log.append(make_report(level="High"))

        assert len(log) == 0
        store.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_area_rejected(self):
        log = ReportLog("futsal", MemoryKeyValueStore())
        with pytest.raises(ValueError):
            await log.append(make_report())

    @pytest.mark.asyncio
    async def test_write_failure_keeps_report_in_memory(self):
        store = MagicMock()
        store.put.side_effect = PersistenceWriteFailure("disk full")
        log = ReportLog("pickleball", store)

        await log.append(make_report())

        assert log.snapshot(T0) == [make_report()]

    @pytest.mark.asyncio
    async def test_concurrent_appends_all_kept(self):
        log = ReportLog("pickleball", MemoryKeyValueStore())
        await asyncio.gather(*(log.append(make_report(observed_at=T0 + i)) for i in range(20)))
        assert len(log) == 20


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_snapshot_filters_without_mutating(self):
        log = ReportLog("pickleball", MemoryKeyValueStore())
        await log.append(make_report(ActivityLevel.BUSY, T0))
        await log.append(make_report(ActivityLevel.LIGHT, T0 + 20 * MIN))

        now = T0 + 46 * MIN
        first = log.snapshot(now)
        second = log.snapshot(now)

        assert first == second == [make_report(ActivityLevel.LIGHT, T0 + 20 * MIN)]
        assert len(log) == 2

    @pytest.mark.asyncio
    async def test_report_exactly_at_window_edge_is_kept(self):
        log = ReportLog("pickleball", MemoryKeyValueStore())
        await log.append(make_report())
        assert len(log.snapshot(T0 + 45 * MIN)) == 1
        assert len(log.snapshot(T0 + 45 * MIN + 1)) == 0

    def test_uninitialized_log_is_empty(self):
        assert ReportLog("pickleball", MemoryKeyValueStore()).snapshot(T0) == []


class TestLoad:
    def test_load_restores_sorted_reports(self):
        payload = json.dumps([{"level": 1, "observed_at": T0 + MIN},
                              {"level": 3, "observed_at": T0}]).encode()
        log = ReportLog("pickleball", MemoryKeyValueStore({KEY: payload}))

        log.load()

        assert [r.level for r in log.snapshot(T0 + MIN)] == [ActivityLevel.BUSY, ActivityLevel.LIGHT]

    @pytest.mark.asyncio
    async def test_round_trip_through_store(self):
        store = MemoryKeyValueStore()
        writer = ReportLog("pickleball", store)
        await writer.append(make_report(ActivityLevel.MEDIUM, T0))

        reader = ReportLog("pickleball", store)
        reader.load()

        assert reader.snapshot(T0) == writer.snapshot(T0)

    @pytest.mark.parametrize("payload", [b"not json", b'[{"level": 7, "observed_at": 1}]', b'[{"level": 1}]'])
    def test_corrupt_record_starts_empty(self, payload):
        log = ReportLog("pickleball", MemoryKeyValueStore({KEY: payload}))
        log.load()
        assert len(log) == 0

    def test_read_failure_starts_empty(self):
        store = MagicMock()
        store.get.side_effect = PersistenceReadFailure("db down")
        log = ReportLog("pickleball", store)

        log.load()

        assert len(log) == 0
