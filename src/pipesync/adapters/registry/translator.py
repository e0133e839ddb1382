"""Translate domain pipeline configuration into registry payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from .schema import EndpointPayload, PipelinePayload, ResourcePayload, SchedulePayload

if TYPE_CHECKING:
    from pipesync.domain.reconciliation.actions import Endpoint, PipelineConfig


def to_pipeline_payload(config: PipelineConfig) -> PipelinePayload:
    resources = (
        [ResourcePayload(role=role) for role in config.resources]
        if config.resources is not None
        else None
    )
    schedule = config.schedule
    return PipelinePayload(
        source=_endpoint(config.source),
        sink=_endpoint(config.sink),
        schedule=SchedulePayload(
            type=schedule.type,
            times=schedule.times,
            hour=schedule.hour,
            minute=schedule.minute,
            second=schedule.second,
        ),
        resources=resources,
        paused=config.paused,
    )


def to_request_body(config: PipelineConfig) -> dict[str, Any]:
    """JSON-ready body for ``PUT /syncs/{id}``; ``resources`` is sent as null when absent."""

    return to_pipeline_payload(config).model_dump(mode="json")


def _endpoint(endpoint: Endpoint) -> EndpointPayload:
    return EndpointPayload(role=endpoint.role, options=cast(dict[str, Any], dict(endpoint.options)))
