# app/models/parking_occupancy.py
"""
Parking lot occupancy state table.
Stores the current occupied-spot count per lot.
Updated by parking_service on visitor check-ins and manual adjustments.
"""

from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base


class ParkingOccupancy(Base):
    __tablename__ = "parking_occupancy"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lot_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    occupied = Column(Integer, default=0, nullable=False)
    total_spots = Column(Integer, default=64, nullable=False)
    last_updated = Column(DateTime)

    def __repr__(self):
        return f"<ParkingOccupancy {self.lot_id} occupied={self.occupied}/{self.total_spots}>"
