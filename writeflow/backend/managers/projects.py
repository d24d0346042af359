"""Project CRUD, search and statistics.

Creating a project bumps the owning workspace's ``projects_count`` in the
same transaction.  Deleting a project removes its documents first and does
not touch any counter, so ``projects_count`` only ever grows.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from loguru import logger
from sqlalchemy import ColumnElement, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.db.tables import Document as DocumentRow
from writeflow.backend.db.tables import Project as ProjectRow
from writeflow.backend.db.tables import Workspace as WorkspaceRow
from writeflow.backend.managers.workspaces import WorkspaceNotFoundError
from writeflow.backend.models.enums import ProjectStatus
from writeflow.backend.models.project import Project, ProjectCreate, ProjectListResult, ProjectStats

DEFAULT_PAGE_SIZE = 9
MAX_PAGE_SIZE = 100

# Only these columns may appear in ORDER BY; anything else sorts by recency.
_SORT_COLUMNS = {
    "name": ProjectRow.name,
    "created_at": ProjectRow.created_at,
}


class ProjectNotFoundError(LookupError):
    """Raised when a project is not found."""


async def create_project(db: AsyncSession, data: ProjectCreate) -> Project:
    """Create a project and increment its workspace's ``projects_count``.

    Raises ``WorkspaceNotFoundError`` if the workspace does not exist.
    """
    if await db.get(WorkspaceRow, data.workspace_id) is None:
        raise WorkspaceNotFoundError(data.workspace_id)

    project = Project.new(data)
    db.add(ProjectRow(**project.model_dump()))
    await db.execute(
        update(WorkspaceRow)
        .where(WorkspaceRow.id == project.workspace_id)
        .values(projects_count=WorkspaceRow.projects_count + 1)
        .execution_options(synchronize_session="fetch")
    )
    await db.commit()
    logger.info("Created project {} ({!r}) in workspace {}", project.id, project.name, project.workspace_id)
    return project


async def list_projects(db: AsyncSession) -> list[Project]:
    """List all projects, most recently updated first."""
    result = await db.execute(select(ProjectRow).order_by(ProjectRow.updated_at.desc()))
    return [Project.model_validate(row) for row in result.scalars().all()]


async def list_projects_by_workspace(db: AsyncSession, workspace_id: str) -> list[Project]:
    """List a workspace's projects, most recently updated first."""
    stmt = select(ProjectRow).where(ProjectRow.workspace_id == workspace_id).order_by(ProjectRow.updated_at.desc())
    result = await db.execute(stmt)
    return [Project.model_validate(row) for row in result.scalars().all()]


async def get_project(db: AsyncSession, project_id: str) -> Project | None:
    """Get a project by ID, or ``None`` if it does not exist."""
    row = await db.get(ProjectRow, project_id)
    return None if row is None else Project.model_validate(row)


async def update_project(db: AsyncSession, project_id: str, project: Project) -> None:
    """Overwrite the editable fields of a project.  No-op if missing.

    Counters, ownership and ``created_at`` are not editable; ``updated_at``
    is set here regardless of the value the caller sent.
    """
    row = await db.get(ProjectRow, project_id)
    if row is None:
        logger.debug("update_project: {} not found, nothing to do", project_id)
        return

    row.name = project.name
    row.description = project.description
    row.icon = project.icon
    row.color = project.color
    row.status = project.status
    row.progress = project.progress
    row.updated_at = datetime.now(UTC)
    await db.commit()


async def delete_project(db: AsyncSession, project_id: str) -> None:
    """Delete a project and every document it owns."""
    docs = await db.execute(delete(DocumentRow).where(DocumentRow.project_id == project_id))
    await db.execute(delete(ProjectRow).where(ProjectRow.id == project_id))
    await db.commit()
    logger.info("Deleted project {} and {} document(s)", project_id, docs.rowcount)


async def search_projects(
    db: AsyncSession,
    *,
    workspace_id: str | None = None,
    query: str | None = None,
    status: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ProjectListResult:
    """Filter, sort and paginate projects.

    - ``query`` is a substring match on name or description.
    - ``status`` must name a ``ProjectStatus``; unknown values are ignored.
    - ``sort`` is ``name`` or ``created_at`` with ``order`` ``ASC``/``DESC``;
      any other sort means ``updated_at DESC``.
    - ``page`` is clamped to at least 1 and ``page_size`` to 1..MAX_PAGE_SIZE.
      A page past the last match returns no items without querying rows.

    ``total`` counts every match, independent of the requested page.
    """
    conditions: list[ColumnElement[bool]] = []
    if workspace_id is not None:
        conditions.append(ProjectRow.workspace_id == workspace_id)
    if query is not None:
        pattern = f"%{query}%"
        conditions.append(or_(ProjectRow.name.like(pattern), ProjectRow.description.like(pattern)))
    if status is not None:
        try:
            conditions.append(ProjectRow.status == ProjectStatus(status))
        except ValueError:
            logger.debug("search_projects: ignoring unknown status filter {!r}", status)

    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

    total = await db.scalar(select(func.count()).select_from(ProjectRow).where(*conditions)) or 0
    offset = (page - 1) * page_size
    if offset >= total:
        return ProjectListResult(items=[], total=total)

    stmt = (
        select(ProjectRow)
        .where(*conditions)
        .order_by(_order_by(sort, order))
        .limit(page_size)
        .offset(offset)
    )
    result = await db.execute(stmt)
    items = [Project.model_validate(row) for row in result.scalars().all()]
    return ProjectListResult(items=items, total=total)


async def get_project_stats(db: AsyncSession) -> ProjectStats:
    """Count projects overall, per status, and created in the last week."""

    async def _count(*conditions: ColumnElement[bool]) -> int:
        return await db.scalar(select(func.count()).select_from(ProjectRow).where(*conditions)) or 0

    week_ago = datetime.now(UTC) - timedelta(weeks=1)
    return ProjectStats(
        total=await _count(),
        active=await _count(ProjectRow.status == ProjectStatus.ACTIVE),
        completed=await _count(ProjectRow.status == ProjectStatus.COMPLETED),
        archived=await _count(ProjectRow.status == ProjectStatus.ARCHIVED),
        this_week=await _count(ProjectRow.created_at > week_ago),
    )


def _order_by(sort: str | None, order: str | None) -> ColumnElement:
    column = _SORT_COLUMNS.get(sort or "")
    if column is None:
        return ProjectRow.updated_at.desc()
    return column.asc() if (order or "DESC").upper() == "ASC" else column.desc()
