"""Workspace CRUD operations.

Encapsulates all workspace data access: create, list, get, switch, update,
delete.
"""

from __future__ import annotations

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.db.tables import Workspace as WorkspaceRow
from writeflow.backend.models.api import WorkspaceUpdate
from writeflow.backend.models.workspace import Workspace, WorkspaceCreate


class WorkspaceNotFoundError(LookupError):
    """Raised when a workspace is not found."""


async def create_workspace(db: AsyncSession, data: WorkspaceCreate) -> Workspace:
    """Create a new workspace with a fresh ID and zero projects."""
    workspace = Workspace.new(data)
    db.add(WorkspaceRow(**workspace.model_dump()))
    await db.commit()
    logger.info("Created workspace {} ({!r})", workspace.id, workspace.name)
    return workspace


async def list_workspaces(db: AsyncSession) -> list[Workspace]:
    """List all workspaces, most recently updated first."""
    result = await db.execute(select(WorkspaceRow).order_by(WorkspaceRow.updated_at.desc()))
    return [Workspace.model_validate(row) for row in result.scalars().all()]


async def get_workspace(db: AsyncSession, workspace_id: str) -> Workspace | None:
    """Get a workspace by ID, or ``None`` if it does not exist."""
    row = await db.get(WorkspaceRow, workspace_id)
    return None if row is None else Workspace.model_validate(row)


async def switch_workspace(db: AsyncSession, workspace_id: str) -> Workspace:
    """Make a workspace current: touch ``last_accessed`` and return it.

    Raises ``WorkspaceNotFoundError`` if missing.
    """
    row = await db.get(WorkspaceRow, workspace_id)
    if row is None:
        raise WorkspaceNotFoundError(workspace_id)
    row.last_accessed = datetime.now(UTC)
    await db.commit()
    return Workspace.model_validate(row)


async def update_workspace(db: AsyncSession, workspace_id: str, body: WorkspaceUpdate) -> Workspace:
    """Overwrite name and description (and status, if given).

    ``updated_at`` is always set here, never taken from the caller.
    Raises ``WorkspaceNotFoundError`` if missing.
    """
    row = await db.get(WorkspaceRow, workspace_id)
    if row is None:
        raise WorkspaceNotFoundError(workspace_id)

    row.name = body.name
    row.description = body.description
    if body.status is not None:
        row.status = body.status
    row.updated_at = datetime.now(UTC)

    await db.commit()
    return Workspace.model_validate(row)


async def delete_workspace(db: AsyncSession, workspace_id: str) -> None:
    """Delete a workspace row.  No-op if missing; projects are left in place."""
    result = await db.execute(delete(WorkspaceRow).where(WorkspaceRow.id == workspace_id))
    await db.commit()
    logger.info("Deleted workspace {} (rows={})", workspace_id, result.rowcount)
