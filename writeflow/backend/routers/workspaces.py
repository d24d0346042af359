"""Workspace command endpoints (RPC-style).

All write operations use POST; reads use GET.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from writeflow.backend.deps import DbSession
from writeflow.backend.managers import workspaces as manager
from writeflow.backend.managers.workspaces import WorkspaceNotFoundError
from writeflow.backend.models.api import WorkspaceUpdate
from writeflow.backend.models.workspace import Workspace, WorkspaceCreate

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.post("/create", response_model=Workspace, status_code=status.HTTP_201_CREATED)
async def create_workspace(body: WorkspaceCreate, db: DbSession) -> Workspace:
    """Create a new workspace."""
    return await manager.create_workspace(db, body)


@router.get("/list", response_model=list[Workspace])
async def list_workspaces(db: DbSession) -> list[Workspace]:
    """List all workspaces, most recently updated first."""
    return await manager.list_workspaces(db)


@router.get("/{workspace_id}/get", response_model=Workspace | None)
async def get_workspace(workspace_id: str, db: DbSession) -> Workspace | None:
    """Get a single workspace by ID (``null`` if absent)."""
    return await manager.get_workspace(db, workspace_id)


@router.post("/{workspace_id}/switch", response_model=Workspace)
async def switch_workspace(workspace_id: str, db: DbSession) -> Workspace:
    """Open a workspace, recording the access time."""
    try:
        return await manager.switch_workspace(db, workspace_id)
    except WorkspaceNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{workspace_id}' not found.") from None


@router.post("/{workspace_id}/update", response_model=Workspace)
async def update_workspace(workspace_id: str, body: WorkspaceUpdate, db: DbSession) -> Workspace:
    """Overwrite a workspace's name and description."""
    try:
        return await manager.update_workspace(db, workspace_id, body)
    except WorkspaceNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{workspace_id}' not found.") from None


@router.post("/{workspace_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(workspace_id: str, db: DbSession) -> None:
    """Delete a workspace by ID."""
    await manager.delete_workspace(db, workspace_id)
