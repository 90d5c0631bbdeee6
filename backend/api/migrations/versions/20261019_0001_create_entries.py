"""Create the append-only entries table.

- entries.id          INTEGER PRIMARY KEY AUTOINCREMENT (ids never reused)
- entries.content     text, 1..280 chars, validated by the API
- entries.created_at  UTC timestamp set at append time
- entries.ip_address  writer's network origin, informational only

Idempotent: the API runs the same CREATE TABLE IF NOT EXISTS at startup.
"""

from __future__ import annotations

from alembic import op

revision = "20261019_0001_create_entries"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("""
    CREATE TABLE IF NOT EXISTS entries (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        content TEXT,
        created_at DATETIME,
        ip_address TEXT
    );
    """)


def downgrade() -> None:
    raise NotImplementedError("Downgrades are not supported: entries are append-only.")
