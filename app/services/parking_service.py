# app/services/parking_service.py
"""
Parking occupancy per lot.
Counts are clamped to [0, total_spots]; a lot row is created on first use
from the configured PARKING_LOTS.
Level: ≥ 80% → high, ≥ 50% → medium, else low.

Every change is also upserted into the remote `parking_data` table
in the background when a remote store is configured.
"""

from datetime import datetime
from sqlalchemy.orm import Session
from app.config import settings
from app.models.parking_occupancy import ParkingOccupancy
from app.services.remote_sync import fire_and_forget, get_remote_client
from app.utils.geo import closest_parking_lot, is_in_park
from app.utils.logger import get_logger

logger = get_logger(__name__)

PARKING_TABLE = "parking_data"


def occupancy_percent(occupied: int, total: int) -> float:
    return round(occupied / total * 100, 1) if total else 0.0


def parking_level(occupied: int, total: int) -> str:
    percent = occupancy_percent(occupied, total)
    if percent >= settings.PARKING_BUSY_PERCENT:
        return "high"
    if percent >= settings.PARKING_MEDIUM_PERCENT:
        return "medium"
    return "low"


def get_or_create_lot(db: Session, lot_id: str) -> ParkingOccupancy:
    lot = db.query(ParkingOccupancy).filter(ParkingOccupancy.lot_id == lot_id).first()
    if not lot:
        config = settings.PARKING_LOTS.get(lot_id, {})
        lot = ParkingOccupancy(lot_id=lot_id, name=config.get("name", lot_id),
                               occupied=0, total_spots=config.get("total_spots", 0),
                               last_updated=datetime.utcnow())
        db.add(lot)
    return lot


def build_parking_record(lot: ParkingOccupancy) -> dict:
    return {
        "lot_id": lot.lot_id,
        "occupied": lot.occupied,
        "last_updated": lot.last_updated.isoformat(),
    }


async def adjust_occupancy(db: Session, lot_id: str, change: int) -> ParkingOccupancy:
    lot = get_or_create_lot(db, lot_id)
    lot.occupied = max(0, min(lot.total_spots, lot.occupied + change))
    lot.last_updated = datetime.utcnow()
    db.commit()
    logger.info(f"[PARKING] {lot_id}: {lot.occupied}/{lot.total_spots}")

    remote = get_remote_client()
    if remote is not None:
        fire_and_forget(remote.upsert(PARKING_TABLE, build_parking_record(lot), on_conflict="lot_id"),
                        f"parking {lot_id}")
    return lot


async def check_in(db: Session, lat: float, lng: float):
    """Count a visitor arriving at the park. Returns the updated lot, or None outside the geofence."""
    if not is_in_park(lat, lng):
        logger.debug(f"[PARKING] Check-in outside park ignored ({lat:.5f}, {lng:.5f})")
        return None
    lot_id = closest_parking_lot(lat, lng)
    if lot_id is None:
        return None
    return await adjust_occupancy(db, lot_id, 1)
