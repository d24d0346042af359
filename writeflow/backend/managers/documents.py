"""Document CRUD operations.

Creating a document adds 1 to the project's ``documents_count`` and the
document's word count to ``words_count``, in the same transaction as the
insert.  Later edits and deletions leave those counters alone.
"""

from __future__ import annotations

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from writeflow.backend.db.tables import Document as DocumentRow
from writeflow.backend.db.tables import Project as ProjectRow
from writeflow.backend.managers.projects import ProjectNotFoundError
from writeflow.backend.models.document import Document, DocumentCreate, reading_time


class DocumentNotFoundError(LookupError):
    """Raised when a document is not found."""


def _to_row(document: Document) -> DocumentRow:
    return DocumentRow(
        **document.model_dump(exclude={"metadata"}),
        metadata_=document.metadata.model_dump(mode="json"),
    )


def _write_back(row: DocumentRow, document: Document) -> None:
    """Copy the mutable fields of *document* onto *row*."""
    row.title = document.title
    row.content = document.content
    row.status = document.status
    row.word_count = document.word_count
    row.char_count = document.char_count
    row.tags = list(document.tags)
    row.metadata_ = document.metadata.model_dump(mode="json")
    row.updated_at = document.updated_at
    row.last_accessed = document.last_accessed


async def create_document(db: AsyncSession, data: DocumentCreate) -> Document:
    """Create a document and update its project's counters.

    Raises ``ProjectNotFoundError`` if the project does not exist.
    """
    if await db.get(ProjectRow, data.project_id) is None:
        msg = f"Project not found: {data.project_id}"
        raise ProjectNotFoundError(msg)

    document = Document.new(data)
    db.add(_to_row(document))
    await db.execute(
        update(ProjectRow)
        .where(ProjectRow.id == document.project_id)
        .values(
            documents_count=ProjectRow.documents_count + 1,
            words_count=ProjectRow.words_count + document.word_count,
        )
        .execution_options(synchronize_session="fetch")
    )
    await db.commit()
    logger.info(
        "Created document {} ({!r}, {} words) in project {}",
        document.id,
        document.title,
        document.word_count,
        document.project_id,
    )
    return document


async def list_documents_by_project(db: AsyncSession, project_id: str) -> list[Document]:
    """List a project's documents, most recently updated first."""
    stmt = select(DocumentRow).where(DocumentRow.project_id == project_id).order_by(DocumentRow.updated_at.desc())
    result = await db.execute(stmt)
    return [Document.model_validate(row) for row in result.scalars().all()]


async def get_document(db: AsyncSession, document_id: str) -> Document | None:
    """Get a document by ID, or ``None`` if it does not exist."""
    row = await db.get(DocumentRow, document_id)
    return None if row is None else Document.model_validate(row)


async def update_document(db: AsyncSession, document_id: str, document: Document) -> None:
    """Overwrite title, content, status, tags and metadata.  No-op if missing.

    Statistics are recomputed from the content and ``metadata.version`` is
    owned by the server: it moves up by one when the content differs from
    the stored content and is otherwise kept.
    """
    row = await db.get(DocumentRow, document_id)
    if row is None:
        logger.debug("update_document: {} not found, nothing to do", document_id)
        return

    current = Document.model_validate(row)
    current.title = document.title
    current.status = document.status
    current.tags = list(document.tags)
    current.metadata = document.metadata.model_copy(update={"version": current.metadata.version})

    if document.content != current.content:
        current.update_content(document.content)
    else:
        current.metadata.reading_time = reading_time(current.word_count)
        current.updated_at = datetime.now(UTC)

    _write_back(row, current)
    await db.commit()


async def save_document_content(db: AsyncSession, document_id: str, content: str) -> None:
    """Replace a document's content (editor autosave).

    Raises ``DocumentNotFoundError`` if missing.
    """
    row = await db.get(DocumentRow, document_id)
    if row is None:
        raise DocumentNotFoundError(document_id)

    current = Document.model_validate(row)
    current.update_content(content)
    _write_back(row, current)
    await db.commit()
    logger.debug("Saved document {} (version={}, words={})", document_id, current.metadata.version, current.word_count)


async def delete_document(db: AsyncSession, document_id: str) -> None:
    """Delete a document.  No-op if missing."""
    await db.execute(delete(DocumentRow).where(DocumentRow.id == document_id))
    await db.commit()
