# app/routers/courts.py
"""Court availability, surface condition and visitor comments."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from app.config import settings
from app.database import get_db
from app.models.court_state import CourtState
from app.schemas.court import CourtOut, CourtUpdate, CommentCreate, CommentOut
from app.services.court_service import (
    add_area_comment, add_court_comment, court_activity, get_or_create_court,
    list_area_comments, list_court_comments, list_courts, update_court,
)

router = APIRouter()


def _with_details(court: CourtState) -> CourtState:
    config = settings.COURTS[court.court_id]
    court.name = config["name"]
    court.lat = config["lat"]
    court.lng = config["lng"]
    court.activity = court_activity(court)
    return court


@router.get("/courts", response_model=list[CourtOut])
def get_courts(area_id: Optional[str] = None, db: Session = Depends(get_db)):
    """Every court, optionally only those of one area."""
    return [_with_details(c) for c in list_courts(db, area_id)]


@router.get("/courts/{court_id}", response_model=CourtOut)
def get_court(court_id: str, db: Session = Depends(get_db)):
    court = get_or_create_court(db, court_id)
    db.commit()
    return _with_details(court)


@router.patch("/courts/{court_id}", response_model=CourtOut, summary="Update availability / condition")
def patch_court(court_id: str, body: CourtUpdate, db: Session = Depends(get_db)):
    return _with_details(update_court(db, court_id, available=body.available, condition=body.condition))


@router.post("/courts/{court_id}/comments", response_model=CommentOut,
             status_code=status.HTTP_201_CREATED)
def post_court_comment(court_id: str, body: CommentCreate, db: Session = Depends(get_db)):
    return add_court_comment(db, court_id, body.text)


@router.get("/courts/{court_id}/comments", response_model=list[CommentOut])
def get_court_comments(court_id: str, db: Session = Depends(get_db)):
    return list_court_comments(db, court_id)


@router.post("/areas/{area_id}/comments", response_model=CommentOut,
             status_code=status.HTTP_201_CREATED, summary="Comment on a whole area")
def post_area_comment(area_id: str, body: CommentCreate, db: Session = Depends(get_db)):
    return add_area_comment(db, area_id, body.text)


@router.get("/areas/{area_id}/comments", response_model=list[CommentOut])
def get_area_comments(area_id: str, db: Session = Depends(get_db)):
    """Area-wide comments and comments on the area's courts, newest first."""
    return list_area_comments(db, area_id)
