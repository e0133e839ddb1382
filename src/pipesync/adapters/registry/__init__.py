"""Public interface for the pipeline registry adapter."""

from __future__ import annotations

from .client import SUCCESS_STATUSES, HttpPipelineRegistry
from .schema import PipelinePayload
from .translator import to_pipeline_payload, to_request_body

__all__ = [
    "SUCCESS_STATUSES",
    "HttpPipelineRegistry",
    "PipelinePayload",
    "to_pipeline_payload",
    "to_request_body",
]
