"""Async SQLAlchemy engine, session factory and schema bootstrap.

Uses aiosqlite so the embedded database is accessed through the same
async API (and the same connection pool) as any other SQLAlchemy backend.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from writeflow.backend.db.tables import Base


def create_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create an async SQLAlchemy engine for the local database.

    For file-backed SQLite URLs the parent directory is created first, so
    opening the database on a fresh machine creates it.

    Default pool parameters suit a single desktop user:

    - **pool_size=5**: baseline connections kept open.
    - **max_overflow=10**: burst capacity above pool_size.
    - **pool_pre_ping=True**: test connections before checkout.

    All defaults can be overridden via *kwargs*.
    """
    url = make_url(database_url)
    in_memory = url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")

    if url.get_backend_name() == "sqlite" and not in_memory:
        Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    defaults: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    if not in_memory:
        defaults.update(pool_size=5, max_overflow=10)
    defaults.update(kwargs)
    return create_async_engine(url, **defaults)  # type: ignore[arg-type]


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to *engine*.

    ``expire_on_commit=False`` so that ORM instances remain usable after
    commit without triggering lazy loads (implicit IO is forbidden in async
    code).
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_schema(engine: AsyncEngine) -> None:
    """Create every missing table.  Existing tables and rows are left alone."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready ({})", engine.url.render_as_string(hide_password=True))
