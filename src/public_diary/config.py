"""Environment-variable-based configuration."""

import os
from pathlib import Path


def get_db_path() -> Path:
    """Return the database file path from DIARY_DB_PATH."""
    raw = os.environ.get("DIARY_DB_PATH", "~/.local/share/public_diary/diary.db")
    return Path(raw).expanduser()


def get_database_url() -> str | None:
    """Return the PostgreSQL URL from DIARY_DATABASE_URL, if set."""
    return os.environ.get("DIARY_DATABASE_URL") or None


def get_log_level() -> str:
    """Return the logging level from DIARY_LOG_LEVEL."""
    return os.environ.get("DIARY_LOG_LEVEL", "WARNING")


def get_admin_token() -> str:
    """Return the admin token from DIARY_ADMIN_TOKEN (empty when unset)."""
    return os.environ.get("DIARY_ADMIN_TOKEN", "")


def get_turnstile_secret() -> str:
    """Return the Turnstile secret from DIARY_TURNSTILE_SECRET_KEY (empty disables the gate)."""
    return os.environ.get("DIARY_TURNSTILE_SECRET_KEY", "")


def get_turnstile_timeout() -> float:
    """Return the Turnstile request timeout in seconds from DIARY_TURNSTILE_TIMEOUT."""
    return float(os.environ.get("DIARY_TURNSTILE_TIMEOUT", "10.0"))


def get_rate_limit_max() -> int:
    """Return the number of writes allowed per window from DIARY_RATE_LIMIT_MAX."""
    return int(os.environ.get("DIARY_RATE_LIMIT_MAX", "60"))


def get_rate_limit_window() -> int:
    """Return the rate-limit window in seconds from DIARY_RATE_LIMIT_WINDOW."""
    return int(os.environ.get("DIARY_RATE_LIMIT_WINDOW", "3600"))


def get_base_url() -> str:
    """Return the public base URL used in feed links from DIARY_BASE_URL."""
    return os.environ.get("DIARY_BASE_URL", "http://localhost").rstrip("/")
