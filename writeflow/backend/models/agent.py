"""Installable agent catalog entries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator


class AgentInstall(BaseModel):
    """Input for installing an agent."""

    name: str
    category: str
    version: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)


class AgentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    version: str
    enabled: bool = True
    description: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="wrap")
    @classmethod
    def _lenient_tags(cls, value: object, handler: ValidatorFunctionWrapHandler) -> list[str]:
        # Unreadable stored tags read as no tags.
        if value is None:
            return []
        try:
            return handler(value)
        except ValidationError:
            return []
