"""
Shared fixtures: every test gets its own SQLite file under ``tmp_path``.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from task_tracker_api.app.core import db
from task_tracker_api.app.core.config import settings
from task_tracker_api.app.main import create_app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh, migrated database without demo data."""
    db_path = tmp_path / "tasks.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "seed_demo_data", False)
    db.init_db()
    return db_path


@pytest.fixture
def client(database):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def clock():
    """Return a function producing strictly increasing UTC datetimes."""
    base = datetime(2025, 9, 1, 9, 0, 0, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def tick() -> datetime:
        ticks["n"] += 1
        return base + timedelta(seconds=ticks["n"])

    return tick
