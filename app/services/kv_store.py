# app/services/kv_store.py
"""
Durable key-value store used by the activity report logs.
Contract: get(key) -> bytes | None, put(key, value: bytes).
Backend failures are raised as PersistenceReadFailure / PersistenceWriteFailure.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from app.database import SessionLocal
from app.errors import PersistenceReadFailure, PersistenceWriteFailure
from app.models.kv_record import KeyValueRecord


class SqlKeyValueStore:
    """Stores each key as one row of the kv_records table."""

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[bytes]:
        try:
            with self._session_factory() as db:
                record = db.query(KeyValueRecord).filter(KeyValueRecord.key == key).first()
                return bytes(record.value) if record else None
        except SQLAlchemyError as e:
            raise PersistenceReadFailure(f"read of '{key}' failed: {e}") from e

    def put(self, key: str, value: bytes) -> None:
        try:
            with self._session_factory() as db:
                record = db.query(KeyValueRecord).filter(KeyValueRecord.key == key).first()
                if not record:
                    record = KeyValueRecord(key=key)
                    db.add(record)
                record.value = value
                record.updated_at = datetime.utcnow()
                db.commit()
        except SQLAlchemyError as e:
            raise PersistenceWriteFailure(f"write of '{key}' failed: {e}") from e


class MemoryKeyValueStore:
    """Process-local store, for tests and for running without a database."""

    def __init__(self, initial: Optional[dict] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)
