# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy; SQLite by default, any SQLAlchemy URL works.
All models are auto-imported here so create_tables() creates every table in one call.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool; SQLite needs this to share connections
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,                  # Set True to log all SQL queries (debug only)
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.kv_record import KeyValueRecord             # noqa
    from app.models.hazard_report import HazardReport           # noqa
    from app.models.parking_occupancy import ParkingOccupancy   # noqa
    from app.models.court_state import CourtState, CourtComment  # noqa
    from app.models.move import Move, MoveComment               # noqa

    Base.metadata.create_all(bind=bind or engine)
