from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from history.db import db_ping
from history.errors import EntryNotFound, StorageError
from history.models import Entry

logger = logging.getLogger(__name__)

EMPTY_ID = 0
BOOTSTRAP_CONTENT = "Hello, World!"
BOOTSTRAP_ORIGIN = "system"


# ----------------------------
# SQL
# ----------------------------

_CREATE_TABLE_SQL = text("""
    CREATE TABLE IF NOT EXISTS entries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        content TEXT,
        created_at DATETIME,
        ip_address TEXT
    );
""")

_INSERT_SQL = text("""
    INSERT INTO entries (content, created_at, ip_address)
    VALUES (:content, :created_at, :ip_address)
    RETURNING id;
""").bindparams(bindparam("created_at", type_=DateTime()))

_SELECT_SQL = text("""
    SELECT id, content, created_at, ip_address
    FROM entries
    WHERE id = :id;
""").columns(created_at=DateTime())

_LATEST_SQL = text("""
    SELECT MAX(id) AS latest FROM entries;
""")

_SEED_SQL = text("""
    INSERT INTO entries (content, created_at, ip_address)
    SELECT :content, :created_at, :ip_address
    WHERE NOT EXISTS (SELECT 1 FROM entries)
    RETURNING id;
""").bindparams(bindparam("created_at", type_=DateTime()))


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _row_to_entry(row: Mapping[str, Any]) -> Entry:
    return Entry(
        id=int(row["id"]),
        content=row["content"],
        created_at=_utc(row["created_at"]),
        origin_address=row["ip_address"] or "",
    )


class EntryStore:
    """
    Append-only log of entries backed by a single ``entries`` table.

    Ids come from the table's AUTOINCREMENT primary key, so concurrent
    appends are serialized by the database and ids are never reused.
    The store holds no mutable state of its own.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def ensure_schema(self) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(_CREATE_TABLE_SQL)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not create entries table: {e}") from e

    def ping(self) -> None:
        """Strict connectivity check; unlike latest_id() this raises StorageError."""
        try:
            db_ping(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Database unreachable: {e}") from e

    def append(self, content: str, origin_address: str) -> int:
        """
        Persist a new entry and return its id.

        Content must already be validated. The insert runs in one transaction;
        on failure nothing is committed and StorageError is raised.
        """
        # stored as naive UTC; _row_to_entry reattaches the zone on read
        created_at = datetime.now(timezone.utc).replace(tzinfo=None)

        try:
            with self.engine.begin() as conn:
                new_id = conn.execute(
                    _INSERT_SQL,
                    {"content": content, "created_at": created_at, "ip_address": origin_address},
                ).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not save entry: {e}") from e

        logger.info("Saved entry %s from %s", new_id, origin_address)
        return int(new_id)

    def get_by_id(self, entry_id: int) -> Entry:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(_SELECT_SQL, {"id": int(entry_id)}).mappings().first()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not read entry {entry_id}: {e}") from e

        if row is None:
            raise EntryNotFound(entry_id)
        return _row_to_entry(row)

    def latest_id(self) -> int:
        """
        Best-effort read of the highest assigned id.

        Returns EMPTY_ID (0) when the log is empty *or* when the database
        cannot be read. Errors are logged, never raised, so startup and the
        root redirect keep working. Use ping() to tell the two cases apart.
        """
        try:
            with self.engine.connect() as conn:
                latest: Optional[int] = conn.execute(_LATEST_SQL).scalar()
        except SQLAlchemyError as e:
            logger.warning("Could not read latest entry id, treating log as empty: %s", e)
            return EMPTY_ID

        return int(latest) if latest is not None else EMPTY_ID

    def seed_if_empty(self) -> Optional[int]:
        """
        Insert the bootstrap entry if the log is empty.

        The emptiness check and the insert are one statement, so two
        processes starting against the same empty database seed it once.
        Returns the new id, or None if the log already had entries.
        """
        created_at = datetime.now(timezone.utc).replace(tzinfo=None)

        try:
            with self.engine.begin() as conn:
                new_id = conn.execute(
                    _SEED_SQL,
                    {"content": BOOTSTRAP_CONTENT, "created_at": created_at, "ip_address": BOOTSTRAP_ORIGIN},
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not seed entries table: {e}") from e

        if new_id is None:
            return None
        logger.info("Seeded empty history with bootstrap entry %s", new_id)
        return int(new_id)
