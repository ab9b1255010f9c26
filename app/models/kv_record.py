# app/models/kv_record.py
"""
Key-value records table — the durable local store.
One row per key; the activity report log of each area lives under
`activity_reports:<area_id>` as a JSON-encoded list.
"""

from sqlalchemy import Column, Integer, String, DateTime, LargeBinary
from app.database import Base


class KeyValueRecord(Base):
    __tablename__ = "kv_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(200), unique=True, nullable=False, index=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<KeyValueRecord {self.key} ({len(self.value or b'')} bytes)>"
