"""AI provider (LLM backend) credentials and connection state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from writeflow.backend.models.enums import ProviderStatus

NEVER_TESTED = "Never"


class AIProviderCreate(BaseModel):
    """Input for registering a new AI provider."""

    name: str
    model_name: str
    api_key: str
    base_url: str | None = None
    icon: str
    bg_color: str
    max_tokens: int
    context_length: int
    description: str | None = None
    priority: int = 0
    model_pointer: str | None = Field(default=None, description="Role of this model: 'main', 'task' or 'inference'.")


class AIProvider(BaseModel):
    """AI provider row (SQLite).

    ``status``, ``status_text`` and ``last_tested`` are written by the
    connection test; everything else comes from the user.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    model_name: str
    api_key: str
    base_url: str | None = None
    icon: str
    bg_color: str
    status: ProviderStatus = ProviderStatus.TESTING
    status_text: str = "Testing..."
    max_tokens: int
    context_length: int
    last_tested: str = NEVER_TESTED
    description: str | None = None
    priority: int = 0
    model_pointer: str | None = None
