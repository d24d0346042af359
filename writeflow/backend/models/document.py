"""Document data models and text statistics.

Word count, character count and reading time are derived from ``content``
and are always recomputed together.  Every content change bumps
``metadata.version`` by one.
"""

from __future__ import annotations

import math
import re
import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator

from writeflow.backend.models.enums import DocumentStatus, DocumentType

WORDS_PER_MINUTE = 200

# Unicode White_Space characters.  Unlike str.split(), the information
# separators \x1c-\x1f are not word breaks.
_WHITESPACE = re.compile(r"[\t\n\v\f\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")

# -- Text statistics ---------------------------------------------------------


def count_words(content: str) -> int:
    """Number of whitespace-delimited tokens."""
    return sum(1 for token in _WHITESPACE.split(content) if token)


def count_chars(content: str) -> int:
    """Number of Unicode code points (not bytes)."""
    return len(content)


def reading_time(word_count: int) -> int:
    """Estimated reading time in whole minutes, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


# -- Models ------------------------------------------------------------------


class DocumentMetadata(BaseModel):
    author: str | None = None
    language: str = "zh-CN"
    reading_time: int = 0
    export_formats: list[str] = Field(default_factory=lambda: ["markdown", "pdf"])
    version: int = 1


class DocumentCreate(BaseModel):
    """Input for creating a new document inside a project."""

    title: str
    content: str | None = None
    content_type: DocumentType = DocumentType.MARKDOWN
    project_id: str
    folder_path: str | None = None
    tags: list[str] | None = None
    template_id: str | None = Field(default=None, description="Reserved for document templates; currently ignored.")


class Document(BaseModel):
    """Document row (SQLite).

    The ORM attribute is ``metadata_`` (``metadata`` is reserved by
    SQLAlchemy's declarative base), so ``validation_alias`` reads it from
    rows while ``populate_by_name`` still accepts ``metadata`` from JSON.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    content: str
    content_type: DocumentType = DocumentType.MARKDOWN
    status: DocumentStatus = DocumentStatus.DRAFT
    word_count: int = 0
    char_count: int = 0
    project_id: str
    folder_path: str | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata, validation_alias="metadata_")
    created_at: datetime
    updated_at: datetime
    last_accessed: datetime

    @field_validator("tags", mode="wrap")
    @classmethod
    def _lenient_tags(cls, value: object, handler: ValidatorFunctionWrapHandler) -> list[str]:
        # NULL or unreadable stored tags read as no tags.
        if value is None:
            return []
        try:
            return handler(value)
        except ValidationError:
            return []

    @field_validator("metadata", mode="wrap")
    @classmethod
    def _lenient_metadata(cls, value: object, handler: ValidatorFunctionWrapHandler) -> DocumentMetadata:
        if value is None:
            return DocumentMetadata()
        try:
            return handler(value)
        except ValidationError:
            return DocumentMetadata()

    @classmethod
    def new(cls, data: DocumentCreate) -> Document:
        now = datetime.now(UTC)
        content = data.content or ""
        words = count_words(content)
        return cls(
            id=str(uuid.uuid4()),
            title=data.title,
            content=content,
            content_type=data.content_type,
            word_count=words,
            char_count=count_chars(content),
            project_id=data.project_id,
            folder_path=data.folder_path,
            tags=data.tags or [],
            metadata=DocumentMetadata(reading_time=reading_time(words)),
            created_at=now,
            updated_at=now,
            last_accessed=now,
        )

    def update_content(self, content: str) -> None:
        """Replace the content, recompute statistics and bump the version."""
        now = datetime.now(UTC)
        self.content = content
        self.word_count = count_words(content)
        self.char_count = count_chars(content)
        self.metadata.reading_time = reading_time(self.word_count)
        self.metadata.version += 1
        self.updated_at = now
        self.last_accessed = now
