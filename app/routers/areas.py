# app/routers/areas.py
"""Area activity — submit crowd-level reports and read the time-weighted status."""

from fastapi import APIRouter, Depends, status
from app.schemas.activity import ActivityReportIn, ActivityReportOut, AreaStatusOut
from app.services.activity_service import ActivityService, get_activity_service
from app.utils.clock import ms_to_datetime

router = APIRouter()


def _report_out(report) -> ActivityReportOut:
    return ActivityReportOut(area_id=report.area_id, level=report.level.label,
                             observed_at=report.observed_at,
                             observed_at_iso=ms_to_datetime(report.observed_at))


@router.get("/areas", response_model=list[AreaStatusOut], summary="Current status of every area")
def list_areas(service: ActivityService = Depends(get_activity_service)):
    return service.all_summaries()


@router.get("/areas/{area_id}/status", response_model=AreaStatusOut)
def get_area_status(area_id: str, service: ActivityService = Depends(get_activity_service)):
    """Light / Medium / Busy. Unknown or quiet areas report Light."""
    return service.area_summary(area_id)


@router.post("/areas/{area_id}/activity", response_model=ActivityReportOut,
             status_code=status.HTTP_201_CREATED, summary="Submit an activity report")
async def submit_activity(area_id: str, body: ActivityReportIn,
                          service: ActivityService = Depends(get_activity_service)):
    report = await service.submit_activity_report(area_id, body.level)
    return _report_out(report)


@router.get("/areas/{area_id}/reports", response_model=list[ActivityReportOut])
def list_live_reports(area_id: str, service: ActivityService = Depends(get_activity_service)):
    """Reports still inside the retention window, oldest first."""
    return [_report_out(r) for r in service.snapshot(area_id)]
