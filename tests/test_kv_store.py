# tests/test_kv_store.py
"""Unit tests for the SQL-backed key-value store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables
from app.errors import PersistenceReadFailure, PersistenceWriteFailure
from app.services.kv_store import SqlKeyValueStore


@pytest.fixture
def store():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    return SqlKeyValueStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


def failing_session_factory():
    db = MagicMock()
    db.query.side_effect = SQLAlchemyError("connection lost")
    factory = MagicMock()
    factory.return_value.__enter__.return_value = db
    return factory


class TestSqlKeyValueStore:
    def test_missing_key_returns_none(self, store):
        assert store.get("activity_reports:futsal") is None

    def test_put_then_get(self, store):
        store.put("activity_reports:futsal", b"[]")
        assert store.get("activity_reports:futsal") == b"[]"

    def test_put_overwrites(self, store):
        store.put("k", b"one")
        store.put("k", b"two")
        assert store.get("k") == b"two"

    def test_read_error_wrapped(self):
        with pytest.raises(PersistenceReadFailure):
            SqlKeyValueStore(failing_session_factory()).get("k")

    def test_write_error_wrapped(self):
        with pytest.raises(PersistenceWriteFailure):
            SqlKeyValueStore(failing_session_factory()).put("k", b"v")
