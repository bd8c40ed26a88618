"""
Configuration from environment variables (optionally loaded from .env).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

load_dotenv()


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///calendar_view.db"
    # Applies when neither the user nor the calendar names a timezone
    default_timezone: str = "UTC"
    default_language: str = "en"
    # Site config key holding the default calendar id
    default_calendar_key: str = "default_cid"
    default_action: str = "display_month"
    session_secret_key: str = "dev-secret"
    session_cookie: str = "phpc_session"
    sql_echo: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("DATABASE_URL", cls.database_url),
            default_timezone=env.get("CALENDAR_DEFAULT_TIMEZONE", cls.default_timezone),
            default_language=env.get("CALENDAR_DEFAULT_LANGUAGE", cls.default_language),
            session_secret_key=env.get("SESSION_SECRET_KEY", cls.session_secret_key),
            session_cookie=env.get("SESSION_COOKIE", cls.session_cookie),
            sql_echo=_flag(env.get("SQL_ECHO", "false")),
        )
