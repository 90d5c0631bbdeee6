"""Alembic baseline revision against a throwaway SQLite file."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from history.repo import EntryStore

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "backend" / "api" / "migrations"


@pytest.fixture
def alembic_config(db_url):
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def test_upgrade_creates_entries_table(alembic_config, engine):
    command.upgrade(alembic_config, "head")

    columns = {c["name"] for c in inspect(engine).get_columns("entries")}
    assert columns == {"id", "content", "created_at", "ip_address"}


def test_upgrade_is_compatible_with_startup_schema(alembic_config, engine):
    """Running the app's CREATE TABLE IF NOT EXISTS first does not break the migration."""
    store = EntryStore(engine)
    store.ensure_schema()
    store.append("before migration", "127.0.0.1")

    command.upgrade(alembic_config, "head")

    assert store.get_by_id(1).content == "before migration"
    assert store.append("after migration", "127.0.0.1") == 2
