# app/services/hazard_service.py
"""
Hazard reports — anonymous visitor reports about problems in an area.
Preset alert types (maintenance, safety, crowding, ...) or free-text "custom".
Reports stay visible for HAZARD_VISIBILITY_HOURS.
"""

from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.errors import InvalidHazardReport, UnknownArea
from app.models.hazard_report import HazardReport
from app.services.activity_report import parse_area
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALERT_TYPES = {
    "maintenance": "Needs Maintenance",
    "safety": "Safety Hazard",
    "crowding": "Overcrowded",
    "lighting": "Lights Out",
    "wet": "Wet Surface",
    "custom": None,   # alert_name comes from the description
}


async def create_hazard_report(db: Session, area_id: str, alert_type: str, description: str,
                               court_id: Optional[str] = None, location: Optional[str] = None,
                               alert_name: Optional[str] = None) -> HazardReport:
    """Validate and persist a hazard report. Always commits immediately."""
    area = parse_area(area_id)
    description = (description or "").strip()
    if not description:
        raise InvalidHazardReport("Please provide a description")
    if alert_type not in ALERT_TYPES:
        raise InvalidHazardReport(f"Unknown alert type '{alert_type}'")

    name = (alert_name or "").strip() or ALERT_TYPES[alert_type] or description
    report = HazardReport(area_id=area, court_id=court_id, alert_type=alert_type,
                          alert_name=name, description=description,
                          location=(location or "").strip() or "Not specified",
                          created_at=datetime.utcnow())
    db.add(report)
    db.commit()
    logger.warning(f"[HAZARD][{alert_type.upper()}] {area}: {name}")
    return report


def list_active_hazards(db: Session, area_id: Optional[str] = None,
                        now: Optional[datetime] = None, limit: Optional[int] = 100) -> list:
    """Hazard reports still within the visibility window, newest first. limit=None returns all."""
    since = (now or datetime.utcnow()) - timedelta(hours=settings.HAZARD_VISIBILITY_HOURS)
    q = db.query(HazardReport).filter(HazardReport.created_at >= since)
    if area_id:
        try:
            area = parse_area(area_id)
        except UnknownArea:
            return []
        q = q.filter(HazardReport.area_id == area)
    q = q.order_by(HazardReport.created_at.desc())
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def group_hazards(reports) -> list[dict]:
    """Collapse reports sharing an alert name: count + most recent time, latest group first."""
    groups: dict = {}
    for r in reports:
        g = groups.setdefault(r.alert_name, {"alert_name": r.alert_name, "alert_type": r.alert_type,
                                             "count": 0, "latest_at": r.created_at})
        g["count"] += 1
        if r.created_at > g["latest_at"]:
            g["latest_at"] = r.created_at
    return sorted(groups.values(), key=lambda g: g["latest_at"], reverse=True)
