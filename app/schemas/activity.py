# app/schemas/activity.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Union


class ActivityReportIn(BaseModel):
    level: Union[str, int]     # Light | Medium | Busy (any case) or 1-3


class ActivityReportOut(BaseModel):
    area_id: str
    level: str
    observed_at: int          # epoch ms
    observed_at_iso: datetime


class AreaStatusOut(BaseModel):
    area_id: str
    status: str
    score: Optional[float] = None
    report_count: int
