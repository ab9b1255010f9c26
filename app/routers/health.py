# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + remote store reachability.
"""

import requests
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from app.database import get_db
from app.config import settings
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    """
    Returns:
    - Backend status
    - Database connectivity
    - Remote store reachability (only when REMOTE_SYNC_URL is set)
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "remote_store": "disabled",
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    if settings.REMOTE_SYNC_ENABLED:
        headers = {"apikey": settings.REMOTE_SYNC_KEY} if settings.REMOTE_SYNC_KEY else {}
        try:
            resp = requests.get(f"{settings.REMOTE_SYNC_URL.rstrip('/')}/rest/v1/",
                                headers=headers, timeout=3)
            result["remote_store"] = "ok" if resp.status_code < 400 else f"http_{resp.status_code}"
        except requests.exceptions.ConnectionError:
            result["remote_store"] = "unreachable"
            result["status"] = "degraded"
        except requests.exceptions.RequestException as e:
            result["remote_store"] = f"error: {str(e)}"
            result["status"] = "degraded"

    return result
