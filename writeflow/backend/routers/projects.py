"""Project command endpoints (RPC-style).

Fixed paths (``/list``, ``/search``, ``/stats``) are declared before the
``/{project_id}/...`` routes.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from writeflow.backend.deps import DbSession
from writeflow.backend.managers import projects as manager
from writeflow.backend.managers.workspaces import WorkspaceNotFoundError
from writeflow.backend.models.project import Project, ProjectCreate, ProjectListResult, ProjectStats

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/create", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(body: ProjectCreate, db: DbSession) -> Project:
    """Create a project inside an existing workspace."""
    try:
        return await manager.create_project(db, body)
    except WorkspaceNotFoundError:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, detail=f"Workspace '{body.workspace_id}' not found."
        ) from None


@router.get("/list", response_model=list[Project])
async def list_projects(db: DbSession) -> list[Project]:
    return await manager.list_projects(db)


@router.get("/search", response_model=ProjectListResult)
async def search_projects(
    db: DbSession,
    workspace_id: str | None = Query(None, description="Only projects in this workspace."),
    query: str | None = Query(None, description="Substring of the name or description."),
    project_status: str | None = Query(None, alias="status", description="Active, Completed or Archived."),
    sort: str | None = Query(None, description="name or created_at; anything else sorts by updated_at."),
    order: str | None = Query(None, description="ASC or DESC."),
    page: int = Query(1, description="1-based page number (values below 1 mean 1)."),
    page_size: int = Query(
        manager.DEFAULT_PAGE_SIZE, description=f"Items per page, clamped to 1..{manager.MAX_PAGE_SIZE}."
    ),
) -> ProjectListResult:
    """Search projects with filters, sorting and pagination."""
    return await manager.search_projects(
        db,
        workspace_id=workspace_id,
        query=query,
        status=project_status,
        sort=sort,
        order=order,
        page=page,
        page_size=page_size,
    )


@router.get("/stats", response_model=ProjectStats)
async def get_project_stats(db: DbSession) -> ProjectStats:
    return await manager.get_project_stats(db)


@router.get("/by-workspace/{workspace_id}", response_model=list[Project])
async def list_projects_by_workspace(workspace_id: str, db: DbSession) -> list[Project]:
    return await manager.list_projects_by_workspace(db, workspace_id)


@router.get("/{project_id}/get", response_model=Project | None)
async def get_project(project_id: str, db: DbSession) -> Project | None:
    """Get a single project by ID (``null`` if absent)."""
    return await manager.get_project(db, project_id)


@router.post("/{project_id}/update", status_code=status.HTTP_204_NO_CONTENT)
async def update_project(project_id: str, body: Project, db: DbSession) -> None:
    """Overwrite a project's editable fields."""
    await manager.update_project(db, project_id, body)


@router.post("/{project_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: str, db: DbSession) -> None:
    """Delete a project together with its documents."""
    await manager.delete_project(db, project_id)
