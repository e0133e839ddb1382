"""Pydantic models describing the registry's pipeline payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class EndpointPayload(RegistryBaseModel):
    role: str
    options: dict[str, Any]


class SchedulePayload(RegistryBaseModel):
    type: str
    times: str = ""
    hour: int = 0
    minute: int = 0
    second: int = 0


class ResourcePayload(RegistryBaseModel):
    role: str


class PipelinePayload(RegistryBaseModel):
    source: EndpointPayload
    sink: EndpointPayload
    schedule: SchedulePayload
    resources: list[ResourcePayload] | None = None
    paused: bool
