"""Service configuration loaded from WRITEFLOW_* environment variables.

These are process-level settings (where the database lives, how to log,
where to bind).  The user-facing application configuration (editor, UI,
export preferences, ...) is the ``AppConfig`` document persisted in the
database -- see ``managers/config.py``.
"""

from __future__ import annotations

from pathlib import Path

import click
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "writeflow-studio"
DATABASE_FILENAME = "writeflow.db"


def default_data_root() -> str:
    """Per-user application data directory (e.g. ``~/.config/writeflow-studio``)."""
    return click.get_app_dir(APP_NAME)


class WriteflowSettings(BaseSettings):
    """WriteFlow Studio backend settings.

    All fields are read from environment variables with the ``WRITEFLOW_``
    prefix.  For example, ``WRITEFLOW_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="WRITEFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_to_file: bool = True
    """Also write a rotating log file under ``<data_root>/logs``."""

    # -- Storage ---------------------------------------------------------------
    data_root: str = ""
    """Directory holding the database file.  Empty means the per-user app dir."""

    database_url: str | None = None
    """Explicit SQLAlchemy URL.  Overrides ``data_root`` when set."""

    # -- Server ----------------------------------------------------------------
    host: str = "127.0.0.1"
    port: int = 8765

    # -- AI providers ----------------------------------------------------------
    provider_test_timeout: float = 10.0
    """Seconds to wait for an AI provider endpoint during a connection test."""

    # -- Helpers ---------------------------------------------------------------

    def resolve_data_root(self) -> Path:
        return Path(self.data_root or default_data_root())

    def resolve_database_url(self) -> str:
        """Return the configured URL or the SQLite file under the data root."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.resolve_data_root() / DATABASE_FILENAME}"


def get_settings() -> WriteflowSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> WriteflowSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return WriteflowSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
