"""
Shared fixtures.

Log output goes to a temp directory and the API endpoint variables are cleared
before any app module is imported, so tests never talk to a real backend.
"""

import os
import tempfile
from datetime import datetime, timedelta

os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "bizsheet-test-logs")
os.environ.pop("API_GATEWAY_URL", None)
os.environ.pop("NEXT_PUBLIC_API_GATEWAY_URL", None)

import pytest

from app.schemas.business import BusinessRecord


class StepClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = None):
        self.current = start or datetime(2024, 5, 20, 9, 0, 0)

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + timedelta(seconds=1)
        return now


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def records():
    return [
        BusinessRecord(id="1", business_name="Zebra Co", phone="555-0001"),
        BusinessRecord(id="2", business_name="Acme", phone="555-0002"),
        BusinessRecord(id="3", business_name="acme bakery", phone="555-0003"),
    ]


@pytest.fixture
def clean_env():
    """Restore os.environ after tests that load config files."""
    saved = dict(os.environ)
    try:
        yield os.environ
    finally:
        os.environ.clear()
        os.environ.update(saved)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'bizsheet-test.db'}"


@pytest.fixture
def db_session(db_url):
    from app.core.database import get_session_factory

    SessionLocal = get_session_factory(db_url)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_url):
    from fastapi.testclient import TestClient

    from app.core.database import get_db, get_session_factory
    from app.main import app

    SessionLocal = get_session_factory(db_url)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
