# app/schemas/parking.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class ParkingOccupancyOut(BaseModel):
    id: int
    lot_id: str
    name: str
    occupied: int
    total_spots: int
    available: Optional[int] = None
    occupancy_percent: Optional[float] = None
    level: Optional[str] = None
    last_updated: Optional[datetime]

    class Config:
        from_attributes = True


class LotCapacityUpdate(BaseModel):
    total_spots: int


class CheckIn(BaseModel):
    lat: float
    lng: float
