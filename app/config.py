# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./park_pulse.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to protect admin endpoints

    # ── Activity status ───────────────────────────────────────────────────
    RETENTION_WINDOW_MINUTES: float = 45.0   # Reports older than this are pruned
    DECAY_WINDOW_MINUTES: float = 45.0       # Weight reaches zero at this age
    LIGHT_UPPER_BOUND: float = 1.6           # weighted avg below → Light
    MEDIUM_UPPER_BOUND: float = 2.3          # weighted avg below → Medium, else Busy

    # ── Remote store (optional, best-effort) ──────────────────────────────
    REMOTE_SYNC_URL: Optional[str] = None    # e.g. https://<project>.supabase.co
    REMOTE_SYNC_KEY: Optional[str] = None
    REMOTE_SYNC_TABLE: str = "court_reports"
    REMOTE_SYNC_TIMEOUT_SECONDS: float = 5.0

    # ── Hazard reports ────────────────────────────────────────────────────
    HAZARD_VISIBILITY_HOURS: int = 24

    # ── Community moves ───────────────────────────────────────────────────
    MOVE_VISIBILITY_HOURS: int = 24          # Moves expire after a day
    MOVE_USER_ID: str = "user"               # No identities: every visitor votes as one id
    MOVE_COMMENT_AUTHOR: str = "You"

    # ── Park geofence (Cauley Creek Park, Duluth GA) ──────────────────────
    PARK_CENTER_LAT: float = 33.9784
    PARK_CENTER_LNG: float = -84.1315
    PARK_RADIUS_KM: float = 0.5

    # ── Parking ───────────────────────────────────────────────────────────
    PARKING_BUSY_PERCENT: float = 80.0
    PARKING_MEDIUM_PERCENT: float = 50.0

    @property
    def PARKING_LOTS(self) -> dict:
        return {
            "lot1": {"name": "Main Parking Lot", "total_spots": 64,
                     "lat": self.PARK_CENTER_LAT, "lng": self.PARK_CENTER_LNG},
        }

    # ── Courts ────────────────────────────────────────────────────────────
    COURT_CONDITIONS: tuple = ("excellent", "good", "fair", "poor")

    @property
    def COURTS(self) -> dict:
        return {
            "pb1": {"name": "Pickleball Court 1", "type": "pickleball", "lat": 33.9785, "lng": -84.1316},
            "pb2": {"name": "Pickleball Court 2", "type": "pickleball", "lat": 33.9786, "lng": -84.1317},
            "pb3": {"name": "Pickleball Court 3", "type": "pickleball", "lat": 33.9787, "lng": -84.1318},
            "pb4": {"name": "Pickleball Court 4", "type": "pickleball", "lat": 33.9788, "lng": -84.1319},
            "pb5": {"name": "Pickleball Court 5", "type": "pickleball", "lat": 33.9789, "lng": -84.1320},
            "bb1": {"name": "Basketball Court 1", "type": "basketball", "lat": 33.9790, "lng": -84.1321},
            "bb2": {"name": "Basketball Court 2", "type": "basketball", "lat": 33.9791, "lng": -84.1322},
            "fc1": {"name": "Futsal Court 1",     "type": "futsal",     "lat": 33.9792, "lng": -84.1323},
            "fc2": {"name": "Futsal Court 2",     "type": "futsal",     "lat": 33.9793, "lng": -84.1324},
            "vb1": {"name": "Sand Volleyball Court 1", "type": "volleyball", "lat": 33.9794, "lng": -84.1325},
            "vb2": {"name": "Sand Volleyball Court 2", "type": "volleyball", "lat": 33.9795, "lng": -84.1326},
            "vb3": {"name": "Sand Volleyball Court 3", "type": "volleyball", "lat": 33.9796, "lng": -84.1327},
        }

    @property
    def REMOTE_SYNC_ENABLED(self) -> bool:
        return bool(self.REMOTE_SYNC_URL)

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None            # Defaults to <project>/logs
    LOG_FILE_NAME: str = "park_pulse.log"
    LOG_FILE_ENABLED: bool = True
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
