"""SQLAlchemy ORM models for the local SQLite database.

These are the single source of truth for the database schema.
``init_schema`` creates any missing table on startup; there are no
migrations.  Column layout matches data files written by earlier releases
of the desktop app, so an existing ``writeflow.db`` opens unchanged.

Uses SQLAlchemy 2.0 declarative style with ``Mapped`` type annotations.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from writeflow.backend.db.types import JsonBlob, JsonEnum, UTCDateTime
from writeflow.backend.models.enums import DocumentStatus, DocumentType, ProjectStatus, WorkspaceStatus


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    pass


# Apply naming convention to the metadata for deterministic constraint names.
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Workspace(Base):
    __tablename__ = "workspaces"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    projects_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    status: Mapped[WorkspaceStatus] = mapped_column(
        JsonEnum(WorkspaceStatus, default=WorkspaceStatus.ACTIVE), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    last_accessed: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)


class Project(Base):
    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_workspace_id", "workspace_id"),)

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ProjectStatus] = mapped_column(JsonEnum(ProjectStatus), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    documents_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    words_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    # SQLite does not enforce this unless PRAGMA foreign_keys is on; managers check parents instead.
    workspace_id: Mapped[str] = mapped_column(ForeignKey("workspaces.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_project_id", "project_id"),)

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[DocumentType] = mapped_column(
        JsonEnum(DocumentType, default=DocumentType.MARKDOWN), nullable=False
    )
    status: Mapped[DocumentStatus] = mapped_column(
        JsonEnum(DocumentStatus, default=DocumentStatus.DRAFT), nullable=False
    )
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    char_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    project_id: Mapped[str] = mapped_column(ForeignKey("projects.id"), nullable=False)
    folder_path: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list | None] = mapped_column(JsonBlob)
    metadata_: Mapped[dict] = mapped_column("metadata", JsonBlob, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    last_accessed: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)


class Config(Base):
    """Singleton row (``id = 1``) holding the serialized ``AppConfig``."""

    __tablename__ = "config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    config_data: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)


class Agent(Base):
    __tablename__ = "agents"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[str] = mapped_column(Text, nullable=False)
    enabled: Mapped[bool] = mapped_column(nullable=False, default=True, server_default="1")
    description: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list] = mapped_column(JsonBlob, nullable=False)


class AIProvider(Base):
    __tablename__ = "ai_providers"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    model_name: Mapped[str] = mapped_column(Text, nullable=False)
    api_key: Mapped[str] = mapped_column(Text, nullable=False)
    base_url: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str] = mapped_column(Text, nullable=False)
    bg_color: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    status_text: Mapped[str] = mapped_column(Text, nullable=False)
    max_tokens: Mapped[int] = mapped_column(Integer, nullable=False)
    context_length: Mapped[int] = mapped_column(Integer, nullable=False)
    last_tested: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    priority: Mapped[int] = mapped_column(Integer, nullable=False)
    model_pointer: Mapped[str | None] = mapped_column(Text)
