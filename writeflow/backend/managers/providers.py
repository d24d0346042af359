"""AI provider CRUD and connection testing.

A connection test is a plain reachability probe: one authenticated GET
against the provider's ``base_url``.  It does not validate the model name
or spend tokens.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import httpx
from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.db.tables import AIProvider as AIProviderRow
from writeflow.backend.models.enums import ProviderStatus
from writeflow.backend.models.provider import AIProvider, AIProviderCreate


class ProviderNotFoundError(LookupError):
    """Raised when an AI provider is not found."""


async def list_ai_providers(db: AsyncSession) -> list[AIProvider]:
    """List providers by ascending priority, then name."""
    stmt = select(AIProviderRow).order_by(AIProviderRow.priority.asc(), AIProviderRow.name.asc())
    result = await db.execute(stmt)
    return [AIProvider.model_validate(row) for row in result.scalars().all()]


async def create_ai_provider(db: AsyncSession, body: AIProviderCreate) -> AIProvider:
    """Register a provider.  It stays in ``testing`` state until tested."""
    provider = AIProvider(id=f"prov-{uuid.uuid4()}", **body.model_dump())
    db.add(AIProviderRow(**provider.model_dump()))
    await db.commit()
    logger.info("Created AI provider {} ({}, model={})", provider.id, provider.name, provider.model_name)
    return provider


async def update_ai_provider(db: AsyncSession, provider: AIProvider) -> None:
    """Overwrite every field of the provider with ``provider.id``.  No-op if missing."""
    await db.execute(
        update(AIProviderRow).where(AIProviderRow.id == provider.id).values(**provider.model_dump(exclude={"id"}))
    )
    await db.commit()


async def delete_ai_provider(db: AsyncSession, provider_id: str) -> None:
    await db.execute(delete(AIProviderRow).where(AIProviderRow.id == provider_id))
    await db.commit()
    logger.info("Deleted AI provider {}", provider_id)


async def probe_ai_provider(db: AsyncSession, provider_id: str, client: httpx.AsyncClient) -> AIProvider:
    """Probe the provider endpoint and record the outcome.

    Raises ``ProviderNotFoundError`` if missing.  Network failures are not
    raised; they are stored as ``error`` status with the failure message.
    """
    row = await db.get(AIProviderRow, provider_id)
    if row is None:
        raise ProviderNotFoundError(provider_id)

    status, status_text = await _probe_endpoint(client, row.base_url, row.api_key)
    row.status = status
    row.status_text = status_text
    row.last_tested = datetime.now(UTC).isoformat(timespec="seconds")
    await db.commit()

    logger.info("Tested AI provider {}: {} ({})", provider_id, status, status_text)
    return AIProvider.model_validate(row)


async def _probe_endpoint(client: httpx.AsyncClient, base_url: str | None, api_key: str) -> tuple[ProviderStatus, str]:
    if not base_url:
        return ProviderStatus.ERROR, "No base URL configured"

    try:
        response = await client.get(base_url, headers={"Authorization": f"Bearer {api_key}"})
    except httpx.HTTPError as exc:
        return ProviderStatus.ERROR, f"Connection failed: {exc}"

    if response.status_code in (401, 403):
        return ProviderStatus.ERROR, f"Authentication failed (HTTP {response.status_code})"
    if response.status_code >= 500:
        return ProviderStatus.ERROR, f"Server error (HTTP {response.status_code})"
    return ProviderStatus.CONNECTED, "Connected"
