# app/models/court_state.py
"""
Court state table — one row per court: whether it is free and its surface condition.
Court comments (per court, or area-wide with court_id NULL) live in court_comments.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text
from app.database import Base


class CourtState(Base):
    __tablename__ = "court_state"

    id = Column(Integer, primary_key=True, autoincrement=True)
    court_id = Column(String(20), unique=True, nullable=False, index=True)
    area_id = Column(String(50), nullable=False, index=True)
    available = Column(Boolean, default=True, nullable=False)
    condition = Column(String(20), default="good", nullable=False)
    last_updated = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<CourtState {self.court_id} available={self.available} condition={self.condition}>"


class CourtComment(Base):
    __tablename__ = "court_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    area_id = Column(String(50), nullable=False, index=True)
    court_id = Column(String(20), index=True)   # NULL for area-wide comments
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
