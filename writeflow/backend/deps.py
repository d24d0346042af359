"""FastAPI dependency injection for DB sessions and settings.

Usage in route handlers::

    @router.post("/things")
    async def create_thing(db: DbSession, thing: ThingCreate) -> Thing:
        ...
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.managers import config as manager
from writeflow.backend.models.config import AppConfig
from writeflow.backend.settings import WriteflowSettings, get_settings


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async SQLAlchemy session, closing it after the request.

    Managers commit on success.  If a handler raises, the session is simply
    closed and the uncommitted transaction is rolled back.
    """
    session: AsyncSession = request.app.state.db_session_factory()
    try:
        yield session
    finally:
        await session.close()


# -- Annotated type aliases for concise route signatures ---------------------

DbSession = Annotated[AsyncSession, Depends(get_db)]
"""Annotated dependency: async SQLAlchemy session (auto-closed after request)."""

Settings = Annotated[WriteflowSettings, Depends(get_settings)]
"""Annotated dependency: cached process settings."""


async def get_app_config(request: Request, db: DbSession) -> AppConfig:
    """Return the active configuration held on ``app.state``.

    The lifespan loads it once at startup; if it is missing (e.g. the app
    is driven without its lifespan) it is loaded from the database here.
    """
    config: AppConfig | None = getattr(request.app.state, "app_config", None)
    if config is None:
        config = await manager.get_config(db)
        request.app.state.app_config = config
    return config


ActiveConfig = Annotated[AppConfig, Depends(get_app_config)]
"""Annotated dependency: the active application configuration."""
