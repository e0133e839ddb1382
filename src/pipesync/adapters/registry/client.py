"""HTTP client for the pipeline registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

import httpx

from pipesync.adapters.http_resilience import ResilientClient
from pipesync.config.registry import RegistryConfig, get_registry_config

from .translator import to_request_body

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from pipesync.config.http_resilience import ResilienceConfig
    from pipesync.domain.ports.registry import PipelineRegistry
    from pipesync.domain.reconciliation.actions import PipelineConfig

log = getLogger(__name__)

SUCCESS_STATUSES: Final[frozenset[int]] = frozenset({200, 202})


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpPipelineRegistry:
    """Apply and remove pipelines with ``PUT``/``DELETE {base_url}/syncs/{id}``.

    Failures are logged and reported as ``False``; nothing is retried and nothing
    raises, so one broken pipeline never blocks the rest of a snapshot.
    """

    config: RegistryConfig = field(default_factory=get_registry_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False)

    async def __aenter__(self) -> HttpPipelineRegistry:
        self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def apply(self, pipeline_id: str, config: PipelineConfig) -> bool:
        log.debug("Putting pipeline %s to registry", pipeline_id)
        return await self._request("PUT", pipeline_id, body=to_request_body(config))

    async def remove(self, pipeline_id: str) -> bool:
        log.debug("Deleting pipeline %s from registry", pipeline_id)
        return await self._request("DELETE", pipeline_id)

    def pipeline_url(self, pipeline_id: str) -> str:
        return f"{self.config.base_url}/syncs/{quote(pipeline_id, safe='')}"

    async def _request(
        self,
        method: str,
        pipeline_id: str,
        *,
        body: dict[str, object] | None = None,
    ) -> bool:
        client = self._ensure_client()
        url = self.pipeline_url(pipeline_id)
        try:
            if body is None:
                response = await client.request(method, url)
            else:
                response = await client.request(method, url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.error("Registry %s %s failed: %s", method, url, exc)
            return False

        if response.status_code not in SUCCESS_STATUSES:
            log.error(
                "Registry %s %s returned status %s: %s",
                method,
                url,
                response.status_code,
                response.text,
            )
            return False

        log.debug("Registry %s %s succeeded: %s", method, url, response.text)
        return True

    def _ensure_client(self) -> ResilientClient:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self._client


if TYPE_CHECKING:
    _registry_check: PipelineRegistry = HttpPipelineRegistry()
