# app/services/court_service.py
"""
Per-court state and comments.

Courts are fixed (settings.COURTS). A state row is created on first touch with
available=True, condition="good". Comments are either tied to one court or
area-wide (court_id NULL); an area's comment list includes both.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.errors import InvalidCourtUpdate, UnknownCourt
from app.models.court_state import CourtComment, CourtState
from app.services.activity_report import parse_area
from app.utils.logger import get_logger

logger = get_logger(__name__)


def court_config(court_id: str) -> dict:
    config = settings.COURTS.get((court_id or "").strip().lower())
    if config is None:
        raise UnknownCourt(court_id)
    return config


def court_activity(court: CourtState) -> str:
    """Map colour for a court: taken → high, worn surface → medium, else low."""
    if not court.available:
        return "high"
    if court.condition in ("fair", "poor"):
        return "medium"
    return "low"


def get_or_create_court(db: Session, court_id: str) -> CourtState:
    config = court_config(court_id)
    court_id = court_id.strip().lower()
    court = db.query(CourtState).filter(CourtState.court_id == court_id).first()
    if not court:
        court = CourtState(court_id=court_id, area_id=config["type"], available=True,
                           condition="good", last_updated=datetime.utcnow())
        db.add(court)
    return court


def list_courts(db: Session, area_id: Optional[str] = None) -> list:
    area = parse_area(area_id) if area_id else None
    courts = [get_or_create_court(db, court_id) for court_id, config in settings.COURTS.items()
              if area is None or config["type"] == area]
    db.commit()
    return courts


def update_court(db: Session, court_id: str, available: Optional[bool] = None,
                 condition: Optional[str] = None) -> CourtState:
    """Partial update; fields left as None are unchanged."""
    if available is None and condition is None:
        raise InvalidCourtUpdate("Nothing to update: give available and/or condition")
    if condition is not None:
        condition = condition.strip().lower()
        if condition not in settings.COURT_CONDITIONS:
            raise InvalidCourtUpdate(
                f"Invalid condition '{condition}': expected one of {', '.join(settings.COURT_CONDITIONS)}")

    court = get_or_create_court(db, court_id)
    if available is not None:
        court.available = available
    if condition is not None:
        court.condition = condition
    court.last_updated = datetime.utcnow()
    db.commit()
    logger.info(f"[COURT] {court.court_id}: available={court.available} condition={court.condition}")
    return court


def _comment_text(text: str) -> str:
    text = (text or "").strip()
    if not text:
        raise InvalidCourtUpdate("Comment text is required")
    return text


def add_court_comment(db: Session, court_id: str, text: str) -> CourtComment:
    text = _comment_text(text)
    court = get_or_create_court(db, court_id)
    now = datetime.utcnow()
    comment = CourtComment(area_id=court.area_id, court_id=court.court_id, text=text, created_at=now)
    court.last_updated = now
    db.add(comment)
    db.commit()
    logger.info(f"[COURT] Comment on {court.court_id}")
    return comment


def add_area_comment(db: Session, area_id: str, text: str) -> CourtComment:
    area = parse_area(area_id)
    comment = CourtComment(area_id=area, court_id=None, text=_comment_text(text),
                           created_at=datetime.utcnow())
    db.add(comment)
    db.commit()
    logger.info(f"[COURT] Area comment on {area}")
    return comment


def list_court_comments(db: Session, court_id: str) -> list:
    court_config(court_id)
    return (db.query(CourtComment)
            .filter(CourtComment.court_id == court_id.strip().lower())
            .order_by(CourtComment.created_at.desc())
            .all())


def list_area_comments(db: Session, area_id: str) -> list:
    """Area-wide comments plus comments on any court of the area, newest first."""
    area = parse_area(area_id)
    return (db.query(CourtComment)
            .filter(CourtComment.area_id == area)
            .order_by(CourtComment.created_at.desc())
            .all())
