"""Project data models."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from writeflow.backend.models.enums import ProjectStatus


class ProjectCreate(BaseModel):
    """Input for creating a new project inside a workspace."""

    name: str
    description: str
    icon: str
    color: str
    workspace_id: str
    template_id: str | None = Field(default=None, description="Reserved for project templates; currently ignored.")


class Project(BaseModel):
    """Project row (SQLite).

    ``documents_count`` and ``words_count`` are denormalized counters
    maintained by the document manager on document creation.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    icon: str
    color: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    progress: int = Field(default=0, description="Percent complete, 0-100 (not validated).")
    documents_count: int = 0
    words_count: int = 0
    workspace_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, data: ProjectCreate) -> Project:
        now = datetime.now(UTC)
        return cls(
            id=str(uuid.uuid4()),
            name=data.name,
            description=data.description,
            icon=data.icon,
            color=data.color,
            workspace_id=data.workspace_id,
            created_at=now,
            updated_at=now,
        )


class ProjectStats(BaseModel):
    total: int
    active: int
    completed: int
    archived: int
    this_week: int


class ProjectListResult(BaseModel):
    """One page of a project search plus the total number of matches."""

    items: list[Project]
    total: int
