# app/routers/parking.py
"""Parking occupancy — read, capacity management and visitor check-in."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.models.parking_occupancy import ParkingOccupancy
from app.schemas.parking import ParkingOccupancyOut, LotCapacityUpdate, CheckIn
from app.services.parking_service import (
    check_in, get_or_create_lot, occupancy_percent, parking_level,
)

router = APIRouter()


def _with_stats(lot: ParkingOccupancy) -> ParkingOccupancy:
    lot.available = max(0, lot.total_spots - lot.occupied)
    lot.occupancy_percent = occupancy_percent(lot.occupied, lot.total_spots)
    lot.level = parking_level(lot.occupied, lot.total_spots)
    return lot


@router.get("/parking", response_model=list[ParkingOccupancyOut])
def get_all_parking(db: Session = Depends(get_db)):
    """Occupancy for every configured lot."""
    lots = [get_or_create_lot(db, lot_id) for lot_id in settings.PARKING_LOTS]
    db.commit()
    return [_with_stats(lot) for lot in lots]


@router.get("/parking/{lot_id}", response_model=ParkingOccupancyOut)
def get_lot(lot_id: str, db: Session = Depends(get_db)):
    lot = db.query(ParkingOccupancy).filter(ParkingOccupancy.lot_id == lot_id).first()
    if not lot:
        raise HTTPException(status_code=404, detail=f"Lot '{lot_id}' not found")
    return _with_stats(lot)


@router.put("/parking/{lot_id}/capacity", summary="Set total spots for a lot")
def set_lot_capacity(lot_id: str, body: LotCapacityUpdate, db: Session = Depends(get_db)):
    if lot_id not in settings.PARKING_LOTS:
        raise HTTPException(status_code=404, detail=f"Lot '{lot_id}' not found")
    if body.total_spots < 0:
        raise HTTPException(status_code=422, detail="total_spots must be >= 0")
    lot = get_or_create_lot(db, lot_id)
    lot.total_spots = body.total_spots
    lot.occupied = min(lot.occupied or 0, body.total_spots)
    db.commit()
    return {"lot_id": lot_id, "total_spots": body.total_spots, "status": "updated"}


@router.post("/parking/check-in", summary="Count a visitor arriving at the park")
async def parking_check_in(body: CheckIn, db: Session = Depends(get_db)):
    """Increments the closest lot when the coordinates fall inside the park geofence."""
    lot = await check_in(db, body.lat, body.lng)
    if lot is None:
        return {"status": "ignored", "reason": "outside park"}
    return {"status": "ok", "lot_id": lot.lot_id, "occupied": lot.occupied}
