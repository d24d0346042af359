"""Application configuration endpoints (RPC-style).

The active configuration lives on ``app.state.app_config`` (loaded once at
startup) and ``/get`` serves it from there; every endpoint that persists a
configuration replaces it.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from writeflow.backend.deps import ActiveConfig, DbSession
from writeflow.backend.managers import config as manager
from writeflow.backend.managers.config import ConfigImportError
from writeflow.backend.models.api import ConfigExportRequest, ConfigImportRequest
from writeflow.backend.models.config import AppConfig

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/get", response_model=AppConfig)
async def get_config(config: ActiveConfig) -> AppConfig:
    """Return the active configuration."""
    return config


@router.post("/save", response_model=AppConfig)
async def save_config(request: Request, body: AppConfig, db: DbSession) -> AppConfig:
    config = await manager.save_config(db, body)
    request.app.state.app_config = config
    return config


@router.post("/import", response_model=AppConfig)
async def import_config(request: Request, body: ConfigImportRequest, db: DbSession) -> AppConfig:
    """Replace the active configuration with the contents of a JSON file."""
    try:
        config = await manager.import_config(db, body.file_path)
    except ConfigImportError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
    request.app.state.app_config = config
    return config


@router.post("/export", status_code=status.HTTP_204_NO_CONTENT)
async def export_config(body: ConfigExportRequest) -> None:
    """Write the given configuration to a JSON file."""
    await manager.export_config(body.config, body.file_path)


@router.post("/reset", response_model=AppConfig)
async def reset_config(request: Request, db: DbSession) -> AppConfig:
    config = await manager.reset_config(db)
    request.app.state.app_config = config
    return config
