"""API request / response schemas for the command endpoints.

These thin schemas sit between HTTP and the managers.  Entity models
(``Workspace``, ``Project``, ...) double as response bodies; only requests
whose shape differs from an entity get a schema here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from writeflow.backend.models.config import AppConfig
from writeflow.backend.models.enums import WorkspaceStatus

# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


class WorkspaceUpdate(BaseModel):
    """Whole-record update of a workspace's editable fields."""

    name: str
    description: str
    status: WorkspaceStatus | None = Field(default=None, description="Unchanged when omitted.")


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class DocumentContentUpdate(BaseModel):
    content: str


# ---------------------------------------------------------------------------
# Agent
# ---------------------------------------------------------------------------


class AgentEnabledUpdate(BaseModel):
    enabled: bool


class AgentVersionUpdate(BaseModel):
    version: str


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class ConfigImportRequest(BaseModel):
    file_path: str


class ConfigExportRequest(BaseModel):
    config: AppConfig
    file_path: str


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


class SystemInfo(BaseModel):
    platform: str
    arch: str
    version: str
