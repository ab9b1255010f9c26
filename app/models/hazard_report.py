# app/models/hazard_report.py
"""
Hazard reports table — anonymous visitor reports about issues in an area
(maintenance, safety, crowding, or free-text custom alerts).
Written by hazard_service, listed by the hazards router.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from app.database import Base


class HazardReport(Base):
    __tablename__ = "hazard_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    area_id = Column(String(50), nullable=False, index=True)
    court_id = Column(String(50))
    alert_type = Column(String(50), nullable=False, index=True)
    alert_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(200), default="Not specified", nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<HazardReport {self.id} area={self.area_id} type={self.alert_type}>"
