"""
Pytest configuration and fixtures for the webhook monitor tests.

This module provides:
- An isolated in-memory SQLite database per test
- A FastAPI test client wired to that database
- Common request payloads
"""

import os

# Must be set before webhook_monitor builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MASTER_WEBHOOK_SERVER_URL"] = ""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from webhook_monitor.api.dependencies.db import get_session
from webhook_monitor.db.base import Base
from webhook_monitor.db.session import build_engine
from webhook_monitor.main import create_app


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables created."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    """Database session for seeding and inspecting test data."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """A test client whose requests run against the test database."""
    app = create_app()

    def override_get_session():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def now():
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def request_payload(now):
    """A valid POST /request body for producer 1."""
    return {
        "producerId": 1,
        "url": "http://consumer.example.com/hook",
        "timestamp": (now - timedelta(days=1)).isoformat(),
        "httpMethod": "POST",
        "headers": {"Content-Type": ["application/json"], "X-Request-Id": ["abc-123"]},
        "responseStatus": 200,
        "responseTime": 0.125,
    }
