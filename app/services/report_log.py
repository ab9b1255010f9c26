# app/services/report_log.py
"""
Per-area activity report log.

Append-only and bounded by age: every append prunes the log down to the
reports observed within the retention window (45 min by default) and writes
the pruned sequence to the durable store. There is no background sweep.

Storage failures never fail an append or a read: the in-memory log stays
authoritative for this process, the failure is only logged.
"""

import asyncio
import json
from dataclasses import replace
from typing import List, Optional
from app.config import settings
from app.errors import PersistenceReadFailure, PersistenceWriteFailure
from app.services.activity_report import ActivityReport, parse_level
from app.services.status_aggregator import MS_PER_MINUTE
from app.utils.logger import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "activity_reports:"


class ReportLog:
    def __init__(self, area_id: str, store, retention_minutes: Optional[float] = None):
        self.area_id = area_id
        self._store = store
        self._retention_ms = (retention_minutes or settings.RETENTION_WINDOW_MINUTES) * MS_PER_MINUTE
        self._reports: List[ActivityReport] = []
        self._lock = asyncio.Lock()

    @property
    def key(self) -> str:
        return f"{KEY_PREFIX}{self.area_id}"

    def __len__(self):
        return len(self._reports)

    def load(self) -> None:
        """Restore the log from the durable store. Unreadable data means an empty log."""
        try:
            raw = self._store.get(self.key)
            if raw is None:
                self._reports = []
                return
            records = json.loads(raw.decode("utf-8"))
            reports = [ActivityReport.from_record(self.area_id, r) for r in records]
        except (PersistenceReadFailure, ValueError, KeyError, TypeError) as e:
            logger.error(f"[ACTIVITY] Could not load {self.key}, starting empty: {e}")
            self._reports = []
            return

        self._reports = sorted(reports, key=lambda r: r.observed_at)
        logger.info(f"[ACTIVITY] Loaded {len(self._reports)} report(s) for {self.area_id}")

    async def append(self, report: ActivityReport) -> None:
        """Append, prune to the retention window, persist. Raises InvalidLevel before touching the log."""
        report = replace(report, level=parse_level(report.level))
        if report.area_id != self.area_id:
            raise ValueError(f"report for '{report.area_id}' appended to log '{self.area_id}'")

        async with self._lock:
            cutoff = report.observed_at - self._retention_ms
            self._reports = [r for r in self._reports + [report] if r.observed_at >= cutoff]
            self._persist()

    def snapshot(self, now: int) -> List[ActivityReport]:
        """Reports no older than the retention window as of `now`. Does not mutate the log."""
        cutoff = now - self._retention_ms
        return [r for r in self._reports if r.observed_at >= cutoff]

    def _persist(self) -> None:
        payload = json.dumps([r.to_record() for r in self._reports]).encode("utf-8")
        try:
            self._store.put(self.key, payload)
        except PersistenceWriteFailure as e:
            logger.warning(f"[ACTIVITY] Persist of {self.key} failed, keeping in-memory state: {e}")
