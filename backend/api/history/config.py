# backend/api/history/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/history.db"
DEFAULT_TIMEZONE = "UTC"


def _load_env_once() -> None:
    """
    Loads .env from:
      1) ENV_PATH if provided
      2) backend/api/.env (project default)
      3) current working directory .env (fallback)

    Values already present in the process environment always win.
    """
    env_path = os.getenv("ENV_PATH")
    if env_path:
        p = Path(env_path)
        if p.exists():
            load_dotenv(p, override=False)
            return

    # this file is backend/api/history/config.py
    backend_api_dir = Path(__file__).resolve().parents[1]
    p2 = backend_api_dir / ".env"
    if p2.exists():
        load_dotenv(p2, override=False)
        return

    p3 = Path.cwd() / ".env"
    if p3.exists():
        load_dotenv(p3, override=False)


def resolve_timezone(name: str | None) -> tzinfo:
    """
    Map a timezone name to a tzinfo.

    Absent names mean UTC. Unknown names are logged and fall back to UTC;
    a bad TZ value must never stop the server from starting.
    """
    tz = (name or "").strip()
    if not tz or tz == DEFAULT_TIMEZONE:
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning("Invalid timezone %r, defaulting to UTC: %s", tz, e)
        return timezone.utc


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    display_timezone: tzinfo = timezone.utc
    host: str = "0.0.0.0"
    port: int = 8080


def load_settings() -> Settings:
    _load_env_once()

    db_url = os.getenv("DATABASE_URL") or os.getenv("DB_URL") or DEFAULT_DATABASE_URL

    return Settings(
        database_url=db_url,
        display_timezone=resolve_timezone(os.getenv("TZ")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )
