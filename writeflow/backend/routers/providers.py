"""AI provider endpoints (RPC-style)."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, HTTPException, status

from writeflow.backend.deps import DbSession, Settings
from writeflow.backend.managers import providers as manager
from writeflow.backend.managers.providers import ProviderNotFoundError
from writeflow.backend.models.provider import AIProvider, AIProviderCreate

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("/list", response_model=list[AIProvider])
async def list_ai_providers(db: DbSession) -> list[AIProvider]:
    return await manager.list_ai_providers(db)


@router.post("/create", response_model=AIProvider, status_code=status.HTTP_201_CREATED)
async def create_ai_provider(body: AIProviderCreate, db: DbSession) -> AIProvider:
    return await manager.create_ai_provider(db, body)


@router.post("/update", status_code=status.HTTP_204_NO_CONTENT)
async def update_ai_provider(body: AIProvider, db: DbSession) -> None:
    """Overwrite a provider record (matched by ``id``)."""
    await manager.update_ai_provider(db, body)


@router.post("/{provider_id}/test", response_model=AIProvider)
async def check_ai_provider(provider_id: str, db: DbSession, settings: Settings) -> AIProvider:
    """Check that the provider endpoint answers and store the result."""
    async with httpx.AsyncClient(timeout=settings.provider_test_timeout) as client:
        try:
            return await manager.probe_ai_provider(db, provider_id, client)
        except ProviderNotFoundError:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Provider '{provider_id}' not found.") from None


@router.post("/{provider_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ai_provider(provider_id: str, db: DbSession) -> None:
    await manager.delete_ai_provider(db, provider_id)
