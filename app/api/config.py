"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

from app.core.uploads import DEFAULT_MAX_UPLOAD_BYTES
from app.database.connection import DEFAULT_DB_PATH

PROJECT_ROOT = Path(__file__).resolve().parents[2]

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_database_url() -> str:
    """Get SQLAlchemy database URL from env or default SQLite file."""
    return os.getenv("DATABASE_URL", "") or f"sqlite:///{DEFAULT_DB_PATH}"


def get_upload_dir() -> str:
    """Get directory for uploaded poster images."""
    return os.getenv("UPLOAD_DIR", "") or str(PROJECT_ROOT / "uploads")


def get_max_upload_bytes() -> int:
    """Get the largest accepted image upload, in bytes."""
    return int(os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES)))


def get_auto_create_schema() -> bool:
    """Whether startup creates the movies table when it is missing."""
    return _get_flag("AUTO_CREATE_SCHEMA", True)


def get_seed_sample_data() -> bool:
    """Whether startup inserts the sample movies into an empty table."""
    return _get_flag("SEED_SAMPLE_DATA", True)


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get log file name; unset means console only."""
    return os.getenv("LOG_FILE") or None


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "3001"))
