# app/utils/clock.py
"""Wall-clock helpers. Report timestamps are epoch milliseconds."""

import time
from datetime import datetime, timezone


def now_ms() -> int:
    return int(time.time() * 1000)


def ms_to_datetime(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
