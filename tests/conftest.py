"""Shared pytest fixtures for history tests."""

from datetime import timezone

import pytest
from fastapi.testclient import TestClient

from history.config import Settings
from history.db import create_db_engine
from history.main import create_app
from history.repo import EntryStore


@pytest.fixture
def db_url(tmp_path):
    """SQLite file URL inside a per-test directory."""
    return f"sqlite:///{tmp_path / 'data' / 'history.db'}"


@pytest.fixture
def engine(db_url):
    eng = create_db_engine(db_url)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    """Fresh store with the schema created and no entries."""
    s = EntryStore(engine)
    s.ensure_schema()
    return s


@pytest.fixture
def settings(db_url):
    return Settings(database_url=db_url, display_timezone=timezone.utc)


@pytest.fixture
def client(settings):
    """TestClient with the app lifespan running (schema + bootstrap entry)."""
    with TestClient(create_app(settings), follow_redirects=False) as c:
        yield c
