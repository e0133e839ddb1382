"""Pydantic models describing the workspace configuration payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkspaceBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def _none_to_empty(value: object) -> object:
    return {} if value is None else value


class DefinitionPayload(WorkspaceBaseModel):
    name: str = ""
    category: str | None = None


class DestinationPayload(WorkspaceBaseModel):
    id: str
    name: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    deleted: bool = False
    is_connection_enabled: bool = Field(default=True, alias="isConnectionEnabled")
    is_processor_enabled: bool = Field(default=True, alias="isProcessorEnabled")
    definition: DefinitionPayload = Field(
        default_factory=DefinitionPayload, alias="destinationDefinition"
    )

    _normalize_config = field_validator("config", mode="before")(_none_to_empty)


class SourcePayload(WorkspaceBaseModel):
    id: str
    name: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    deleted: bool = False
    definition: DefinitionPayload = Field(
        default_factory=DefinitionPayload, alias="sourceDefinition"
    )
    destinations: list[DestinationPayload] = Field(default_factory=list)

    _normalize_config = field_validator("config", mode="before")(_none_to_empty)

    @field_validator("destinations", mode="before")
    @classmethod
    def _null_destinations(cls, value: object) -> object:
        return [] if value is None else value


class WorkspaceConfigResponse(WorkspaceBaseModel):
    sources: list[SourcePayload] = Field(default_factory=list)

    @field_validator("sources", mode="before")
    @classmethod
    def _null_sources(cls, value: object) -> object:
        return [] if value is None else value
