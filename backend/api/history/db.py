# backend/api/history/db.py
from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url


def _ensure_sqlite_dir(db_url: str) -> None:
    url = make_url(db_url)
    database = url.database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(db_url: str) -> Engine:
    """
    Build the engine for DATABASE_URL.

    Only SQLite is supported: the entries DDL relies on AUTOINCREMENT.
    SQLite files get their parent directory created, and pooled connections
    may be handed to any request thread.
    """
    if not db_url:
        raise RuntimeError("DATABASE_URL is not set.")

    url = make_url(db_url)
    if not url.drivername.startswith("sqlite"):
        raise RuntimeError(
            f"Unsupported database '{url.drivername}': DATABASE_URL must be a sqlite:/// URL."
        )

    _ensure_sqlite_dir(db_url)
    return create_engine(
        db_url,
        pool_pre_ping=True,
        future=True,
        connect_args={"check_same_thread": False},
    )


def db_ping(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def redacted_url(engine: Engine) -> str:
    return engine.url.render_as_string(hide_password=True)
