# app/services/activity_service.py
"""
Activity reporting — the submit/read surface used by the routers.

submit_activity_report: validate → append to the area's log (prune + persist)
                        → replicate to the remote store in the background
get_current_status:     time-weighted status over the area's live snapshot

Logs are loaded once at startup and kept in memory; reads never touch storage.
"""

from typing import Callable, Dict, List, Optional
from app.errors import UnknownArea
from app.services.activity_report import (
    AREA_IDS, ActivityLevel, ActivityReport, parse_area, parse_level,
)
from app.services.kv_store import SqlKeyValueStore
from app.services.remote_sync import RemoteStoreClient, get_remote_client, schedule_replication
from app.services.report_log import ReportLog
from app.services.status_aggregator import compute_status, level_for_score, weighted_average
from app.utils.clock import now_ms
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ActivityService:
    def __init__(self, store, remote: Optional[RemoteStoreClient] = None,
                 clock: Callable[[], int] = now_ms,
                 retention_minutes: Optional[float] = None,
                 decay_minutes: Optional[float] = None):
        self._store = store
        self._remote = remote
        self._clock = clock
        self._retention_minutes = retention_minutes
        self._decay_minutes = decay_minutes
        self._logs: Dict[str, ReportLog] = {}

    def _log_for(self, area_id: str) -> ReportLog:
        log = self._logs.get(area_id)
        if log is None:
            log = ReportLog(area_id, self._store, self._retention_minutes)
            self._logs[area_id] = log
        return log

    def load(self) -> None:
        """Restore every area's log from durable storage."""
        for area_id in AREA_IDS:
            self._log_for(area_id).load()

    async def submit_activity_report(self, area_id: str, level) -> ActivityReport:
        """Raises InvalidLevel / UnknownArea; storage and remote failures are not raised."""
        parsed_level = parse_level(level)
        area = parse_area(area_id)
        report = ActivityReport(area_id=area, level=parsed_level, observed_at=self._clock())

        await self._log_for(area).append(report)
        logger.info(f"[ACTIVITY] {area}: {parsed_level.label} report received "
                    f"({len(self._logs[area])} live)")

        if self._remote is not None:
            schedule_replication(self._remote, report)
        return report

    def snapshot(self, area_id: str, now: Optional[int] = None) -> List[ActivityReport]:
        try:
            area = parse_area(area_id)
        except UnknownArea:
            return []
        log = self._logs.get(area)
        if log is None:
            return []
        return log.snapshot(self._clock() if now is None else now)

    def get_current_status(self, area_id: str) -> ActivityLevel:
        """Always succeeds; Light for unknown or empty areas."""
        now = self._clock()
        return compute_status(self.snapshot(area_id, now), now, self._decay_minutes)

    def area_summary(self, area_id: str) -> dict:
        now = self._clock()
        reports = self.snapshot(area_id, now)
        score = weighted_average(reports, now, self._decay_minutes)
        return {
            "area_id": area_id,
            "status": level_for_score(score).label,
            "score": round(score, 3) if score is not None else None,
            "report_count": len(reports),
        }

    def all_summaries(self) -> List[dict]:
        return [self.area_summary(area_id) for area_id in AREA_IDS]


_service: Optional[ActivityService] = None


def get_activity_service() -> ActivityService:
    """FastAPI dependency — process-wide service backed by the SQL store."""
    global _service
    if _service is None:
        _service = ActivityService(SqlKeyValueStore(), get_remote_client())
    return _service
