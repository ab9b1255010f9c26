# app/services/remote_sync.py
"""
Best-effort replication to the remote store (a Supabase-style REST API).

Tables:  POST {REMOTE_SYNC_URL}/rest/v1/{table}
RPC:     POST {REMOTE_SYNC_URL}/rest/v1/rpc/{function}

Activity reports go to `court_reports` as
    {"court_type": "...", "status": "light|medium|busy", "created_at": "<ISO-8601>"}
parking counts are upserted into `parking_data`, moves into `moves`.

One attempt per write, no retry. Writes run as detached tasks;
their failure is logged and dropped, local storage stays authoritative.
"""

import asyncio
from typing import Optional

import httpx

from app.config import settings
from app.errors import RemoteSyncFailure
from app.services.activity_report import ActivityReport
from app.utils.clock import ms_to_datetime
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Strong references to in-flight tasks so they are not garbage collected
_pending_tasks: set = set()


def build_remote_record(report: ActivityReport) -> dict:
    created_at = ms_to_datetime(report.observed_at)
    return {
        "court_type": report.area_id,
        "status": report.level.wire_value,
        "created_at": created_at.isoformat(),
    }


class RemoteStoreClient:
    def __init__(self, base_url: str, api_key: Optional[str] = None,
                 report_table: str = "court_reports", timeout: float = 5.0):
        self.base_url = f"{base_url.rstrip('/')}/rest/v1"
        self.report_table = report_table
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if api_key:
            self.headers["apikey"] = api_key
            self.headers["Authorization"] = f"Bearer {api_key}"

    @classmethod
    def from_settings(cls) -> Optional["RemoteStoreClient"]:
        if not settings.REMOTE_SYNC_ENABLED:
            return None
        return cls(settings.REMOTE_SYNC_URL, settings.REMOTE_SYNC_KEY,
                   settings.REMOTE_SYNC_TABLE, settings.REMOTE_SYNC_TIMEOUT_SECONDS)

    def table_url(self, table: str) -> str:
        return f"{self.base_url}/{table}"

    def rpc_url(self, function: str) -> str:
        return f"{self.base_url}/rpc/{function}"

    async def _post(self, url: str, payload, prefer: Optional[str] = None, params: Optional[dict] = None):
        headers = dict(self.headers)
        if prefer:
            headers["Prefer"] = prefer
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise RemoteSyncFailure(f"{type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            raise RemoteSyncFailure(f"HTTP {response.status_code}: {response.text[:200]}")
        return response

    async def insert(self, table: str, record: dict) -> None:
        await self._post(self.table_url(table), record, prefer="return=minimal")

    async def insert_returning(self, table: str, record: dict) -> dict:
        """Insert one row and return it as stored remotely (id, created_at, ...)."""
        response = await self._post(self.table_url(table), record, prefer="return=representation")
        rows = response.json()
        if not rows:
            raise RemoteSyncFailure(f"insert into {table} returned no row")
        return rows[0] if isinstance(rows, list) else rows

    async def upsert(self, table: str, record: dict, on_conflict: str) -> None:
        await self._post(self.table_url(table), record,
                         prefer="resolution=merge-duplicates,return=minimal",
                         params={"on_conflict": on_conflict})

    async def rpc(self, function: str, params: Optional[dict] = None):
        response = await self._post(self.rpc_url(function), params or {})
        return response.json() if response.content else None

    async def insert_report(self, report: ActivityReport) -> None:
        record = build_remote_record(report)
        await self.insert(self.report_table, record)
        logger.debug(f"[SYNC] Replicated {record['court_type']}={record['status']}")


_client: Optional[RemoteStoreClient] = None


def get_remote_client() -> Optional[RemoteStoreClient]:
    """Process-wide client, or None when no remote store is configured."""
    global _client
    if _client is None:
        _client = RemoteStoreClient.from_settings()
    return _client


async def attempt(write, what: str) -> bool:
    """Await one remote write. Returns False on failure instead of raising."""
    try:
        await write
        return True
    except RemoteSyncFailure as e:
        logger.warning(f"[SYNC] Remote store unavailable, {what} kept locally only: {e}")
        return False


def fire_and_forget(write, what: str) -> asyncio.Task:
    """Run a remote write in the background. Callers must not await the returned task."""
    task = asyncio.get_running_loop().create_task(attempt(write, what))
    _pending_tasks.add(task)
    task.add_done_callback(_pending_tasks.discard)
    return task


async def replicate_report(client: RemoteStoreClient, report: ActivityReport) -> bool:
    return await attempt(client.insert_report(report), f"{report.area_id} report")


def schedule_replication(client: RemoteStoreClient, report: ActivityReport) -> asyncio.Task:
    return fire_and_forget(client.insert_report(report), f"{report.area_id} report")
