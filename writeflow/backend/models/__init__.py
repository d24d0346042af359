"""Data models for the WriteFlow Studio backend."""

from writeflow.backend.models.agent import AgentInstall, AgentModel
from writeflow.backend.models.api import (
    AgentEnabledUpdate,
    AgentVersionUpdate,
    ConfigExportRequest,
    ConfigImportRequest,
    DocumentContentUpdate,
    SystemInfo,
    WorkspaceUpdate,
)
from writeflow.backend.models.config import AppConfig
from writeflow.backend.models.document import Document, DocumentCreate, DocumentMetadata
from writeflow.backend.models.enums import (
    ColorScheme,
    DocumentStatus,
    DocumentType,
    ProjectStatus,
    ProviderStatus,
    WorkspaceStatus,
)
from writeflow.backend.models.project import Project, ProjectCreate, ProjectListResult, ProjectStats
from writeflow.backend.models.provider import AIProvider, AIProviderCreate
from writeflow.backend.models.workspace import Workspace, WorkspaceCreate

__all__ = [
    # Provider
    "AIProvider",
    "AIProviderCreate",
    # API schemas
    "AgentEnabledUpdate",
    # Agent
    "AgentInstall",
    "AgentModel",
    "AgentVersionUpdate",
    # Config
    "AppConfig",
    # Enums
    "ColorScheme",
    "ConfigExportRequest",
    "ConfigImportRequest",
    # Document
    "Document",
    "DocumentContentUpdate",
    "DocumentCreate",
    "DocumentMetadata",
    "DocumentStatus",
    "DocumentType",
    # Project
    "Project",
    "ProjectCreate",
    "ProjectListResult",
    "ProjectStats",
    "ProjectStatus",
    "ProviderStatus",
    "SystemInfo",
    # Workspace
    "Workspace",
    "WorkspaceCreate",
    "WorkspaceStatus",
    "WorkspaceUpdate",
]
