"""Shared fixtures for backend endpoint tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.app import app
from writeflow.backend.deps import get_db
from writeflow.backend.models.config import AppConfig


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with a test DB session.

    Overrides ``get_db`` so every request uses the ``db_session`` fixture
    from the root conftest.  The app lifespan does NOT run under
    ``ASGITransport``, so state fields are pre-set here.
    """

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    # Pre-set state fields (lifespan does not run under ASGITransport).
    app.state.db_engine = None
    app.state.db_session_factory = None
    app.state.app_config = AppConfig.default()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Parent records
# ---------------------------------------------------------------------------


@pytest.fixture
async def workspace(client: AsyncClient) -> dict[str, Any]:
    """A freshly created workspace (as returned by the API)."""
    resp = await client.post("/api/workspaces/create", json={"name": "Main", "description": "desc"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
async def project(client: AsyncClient, workspace: dict[str, Any]) -> dict[str, Any]:
    """A freshly created project inside ``workspace``."""
    payload = {
        "name": "Novel",
        "description": "A long story",
        "icon": "book",
        "color": "#3366ff",
        "workspace_id": workspace["id"],
    }
    resp = await client.post("/api/projects/create", json=payload)
    assert resp.status_code == 201
    return resp.json()
