# app/schemas/court.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class CourtOut(BaseModel):
    court_id: str
    name: str
    area_id: str
    lat: float
    lng: float
    available: bool
    condition: str
    activity: str           # high / medium / low
    last_updated: datetime

    class Config:
        from_attributes = True


class CourtUpdate(BaseModel):
    available: Optional[bool] = None
    condition: Optional[str] = None


class CommentCreate(BaseModel):
    text: str


class CommentOut(BaseModel):
    id: int
    area_id: str
    court_id: Optional[str]
    text: str
    created_at: datetime

    class Config:
        from_attributes = True
