"""Shared enumerations.

Values are the variant names the desktop UI sends and the database already
contains, so they must never be renamed.
"""

from __future__ import annotations

from enum import StrEnum

# -- Workspace ---------------------------------------------------------------


class WorkspaceStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


# -- Project -----------------------------------------------------------------


class ProjectStatus(StrEnum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"


# -- Document ----------------------------------------------------------------


class DocumentType(StrEnum):
    """Format of a document's ``content``."""

    MARKDOWN = "Markdown"
    PLAIN_TEXT = "PlainText"
    RICH_TEXT = "RichText"


class DocumentStatus(StrEnum):
    """Editorial workflow stage of a document."""

    DRAFT = "Draft"
    IN_PROGRESS = "InProgress"
    REVIEW = "Review"
    FINAL = "Final"


# -- Config ------------------------------------------------------------------


class ColorScheme(StrEnum):
    LIGHT = "Light"
    DARK = "Dark"
    AUTO = "Auto"


# -- AI provider -------------------------------------------------------------


class ProviderStatus(StrEnum):
    """Connection state of an AI provider, set by the connection test."""

    CONNECTED = "connected"
    TESTING = "testing"
    ERROR = "error"
    DISCONNECTED = "disconnected"
