# app/schemas/hazard.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class HazardReportCreate(BaseModel):
    area_id: str
    alert_type: str = "custom"
    description: str
    alert_name: Optional[str] = None
    court_id: Optional[str] = None
    location: Optional[str] = None


class HazardReportOut(BaseModel):
    id: int
    area_id: str
    court_id: Optional[str]
    alert_type: str
    alert_name: str
    description: str
    location: str
    created_at: datetime

    class Config:
        from_attributes = True


class HazardGroupOut(BaseModel):
    alert_name: str
    alert_type: str
    count: int
    latest_at: datetime
