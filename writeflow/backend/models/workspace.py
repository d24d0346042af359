"""Workspace data model.

A workspace is the top-level grouping of projects.  ``projects_count`` is a
denormalized counter bumped when a project is created through the project
manager; it is never recomputed from the ``projects`` table.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from writeflow.backend.models.enums import WorkspaceStatus


class WorkspaceCreate(BaseModel):
    """Input for creating a new workspace."""

    name: str
    description: str = ""


class Workspace(BaseModel):
    """Workspace row (SQLite)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    projects_count: int = 0
    status: WorkspaceStatus = WorkspaceStatus.ACTIVE
    created_at: datetime
    updated_at: datetime
    last_accessed: datetime

    @classmethod
    def new(cls, data: WorkspaceCreate) -> Workspace:
        now = datetime.now(UTC)
        return cls(
            id=str(uuid.uuid4()),
            name=data.name,
            description=data.description,
            created_at=now,
            updated_at=now,
            last_accessed=now,
        )
