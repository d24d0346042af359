"""Shared test fixtures: a throwaway SQLite database per test.

Every test function gets its own database file under ``tmp_path`` with the
full schema created by ``init_schema`` (the same bootstrap the server runs
on startup), so tests never see each other's rows.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from writeflow.backend.db.engine import create_engine, create_session_factory, init_schema
from writeflow.backend.settings import _get_settings_cached


def _set_env(key: str, value: str) -> None:
    """Set an env var and invalidate the settings cache."""
    os.environ[key] = value
    _get_settings_cached.cache_clear()


# ---------------------------------------------------------------------------
# Settings: point the data root at the test's temp directory
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def data_root(tmp_path: Path) -> Iterator[Path]:
    """Keep every test away from the real per-user data directory."""
    root = tmp_path / "data"
    _set_env("WRITEFLOW_DATA_ROOT", str(root))
    yield root
    os.environ.pop("WRITEFLOW_DATA_ROOT", None)
    _get_settings_cached.cache_clear()


# ---------------------------------------------------------------------------
# Function-scoped: engine and DB session on a fresh database file
# ---------------------------------------------------------------------------


@pytest.fixture
async def async_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """Async engine on an empty database file with the schema applied."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Async SQLAlchemy session, closed after the test."""
    async with create_session_factory(async_engine)() as session:
        yield session
