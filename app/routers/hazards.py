# app/routers/hazards.py
"""Hazard reports — submit + list endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from app.database import get_db
from app.schemas.hazard import HazardReportCreate, HazardReportOut, HazardGroupOut
from app.services.hazard_service import create_hazard_report, list_active_hazards, group_hazards

router = APIRouter()


@router.post("/hazards", response_model=HazardReportOut, status_code=status.HTTP_201_CREATED,
             summary="Report a hazard in an area")
async def report_hazard(body: HazardReportCreate, db: Session = Depends(get_db)):
    return await create_hazard_report(db, body.area_id, body.alert_type, body.description,
                                      court_id=body.court_id, location=body.location,
                                      alert_name=body.alert_name)


@router.get("/hazards", response_model=list[HazardReportOut], summary="Active hazard reports")
def get_hazards(area_id: Optional[str] = None, limit: int = 100, db: Session = Depends(get_db)):
    """Hazards reported within the visibility window, newest first."""
    return list_active_hazards(db, area_id=area_id, limit=limit)


@router.get("/areas/{area_id}/hazards", response_model=list[HazardGroupOut])
def get_area_hazards(area_id: str, limit: int = 100, db: Session = Depends(get_db)):
    """Active hazards for one area, grouped by alert name. Every active report is counted; limit caps the groups."""
    return group_hazards(list_active_hazards(db, area_id=area_id, limit=None))[:limit]
