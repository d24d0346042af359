"""Document command endpoints (RPC-style)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from writeflow.backend.deps import DbSession
from writeflow.backend.managers import documents as manager
from writeflow.backend.managers.documents import DocumentNotFoundError
from writeflow.backend.managers.projects import ProjectNotFoundError
from writeflow.backend.models.api import DocumentContentUpdate
from writeflow.backend.models.document import Document, DocumentCreate

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/create", response_model=Document, status_code=status.HTTP_201_CREATED)
async def create_document(body: DocumentCreate, db: DbSession) -> Document:
    """Create a document inside an existing project."""
    try:
        return await manager.create_document(db, body)
    except ProjectNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Failed to create document: {exc}") from None


@router.get("/by-project/{project_id}", response_model=list[Document])
async def list_documents_by_project(project_id: str, db: DbSession) -> list[Document]:
    return await manager.list_documents_by_project(db, project_id)


@router.get("/{document_id}/get", response_model=Document | None)
async def get_document(document_id: str, db: DbSession) -> Document | None:
    """Get a single document by ID (``null`` if absent)."""
    return await manager.get_document(db, document_id)


@router.post("/{document_id}/update", status_code=status.HTTP_204_NO_CONTENT)
async def update_document(document_id: str, body: Document, db: DbSession) -> None:
    """Overwrite a document's title, content, status, tags and metadata."""
    await manager.update_document(db, document_id, body)


@router.post("/{document_id}/content", status_code=status.HTTP_204_NO_CONTENT)
async def save_document_content(document_id: str, body: DocumentContentUpdate, db: DbSession) -> None:
    """Replace a document's content (editor save)."""
    try:
        await manager.save_document_content(db, document_id, body.content)
    except DocumentNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Document '{document_id}' not found.") from None


@router.post("/{document_id}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: str, db: DbSession) -> None:
    await manager.delete_document(db, document_id)
