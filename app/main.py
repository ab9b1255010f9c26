# app/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import areas, courts, hazards, moves, parking, health
from app.database import SessionLocal, create_tables
from app.config import settings
from app.errors import (
    InvalidCourtUpdate, InvalidHazardReport, InvalidLevel, InvalidMove,
    UnknownArea, UnknownCourt, UnknownMove,
)
from app.services.activity_service import get_activity_service
from app.services.move_service import load_moves
from app.services.remote_sync import get_remote_client
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Park Pulse API",
    description="Court activity, hazard reports and parking occupancy for park visitors.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (mobile client + web preview) ──────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth for admin endpoints (PUT: capacity changes).
    Visitor reporting stays anonymous — GET/POST are never gated.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        if request.method != "PUT" or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(InvalidLevel)
@app.exception_handler(UnknownArea)
@app.exception_handler(InvalidHazardReport)
@app.exception_handler(InvalidCourtUpdate)
@app.exception_handler(InvalidMove)
async def validation_exception_handler(request: Request, exc: Exception):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


@app.exception_handler(UnknownCourt)
@app.exception_handler(UnknownMove)
async def not_found_exception_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(areas.router,   prefix="/api/v1", tags=["🏓 Area Activity"])
app.include_router(hazards.router, prefix="/api/v1", tags=["⚠️ Hazards"])
app.include_router(courts.router,  prefix="/api/v1", tags=["🏀 Courts"])
app.include_router(moves.router,   prefix="/api/v1", tags=["🙌 Community Moves"])
app.include_router(parking.router, prefix="/api/v1", tags=["🅿️  Parking"])
app.include_router(health.router,  prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Park Pulse starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    get_activity_service().load()
    db = SessionLocal()
    try:
        active = await load_moves(db, get_remote_client())
        logger.info(f"🙌 {len(active)} active community move(s)")
    finally:
        db.close()
    logger.info(f"🔁 Remote sync: {'enabled' if settings.REMOTE_SYNC_ENABLED else 'disabled'}")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Park Pulse shutting down...")
