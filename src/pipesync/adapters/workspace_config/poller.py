"""Poll the workspace configuration backend and publish changed snapshots."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from pipesync.adapters.http_resilience import ResilientClient
from pipesync.config.workspace import WorkspaceConfig, get_workspace_config

from .translator import WorkspaceConfigError, parse_snapshot

if TYPE_CHECKING:
    from pipesync.config.http_resilience import ResilienceConfig
    from pipesync.domain.model import Snapshot
    from pipesync.domain.ports.feed import SnapshotFeed

log = getLogger(__name__)

WORKSPACE_CONFIG_PATH = "/workspaceConfig"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class WorkspaceConfigPoller:
    """Snapshot feed backed by periodic ``GET /workspaceConfig`` requests.

    A snapshot is published only when it differs from the last one published,
    so an idle workspace produces no queue traffic. Fetch errors are logged and
    the next poll tries again.
    """

    config: WorkspaceConfig = field(default_factory=get_workspace_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)
    _last_published: Snapshot | None = field(default=None, init=False)

    async def run(self, queue: asyncio.Queue[Snapshot]) -> None:
        async with self.client_factory(self.config.resilience) as client:
            while True:
                await self.poll_once(client, queue)
                await self.sleep(self.config.poll_interval_seconds)

    async def poll_once(self, client: ResilientClient, queue: asyncio.Queue[Snapshot]) -> bool:
        """Fetch once; return whether a new snapshot was published."""

        try:
            snapshot = await self.fetch(client)
        except (httpx.HTTPError, WorkspaceConfigError) as exc:
            log.error("Failed to fetch workspace config: %s", exc)
            return False

        if snapshot == self._last_published:
            log.debug("Workspace config unchanged")
            return False

        log.info("Received workspace config with %s sources", len(snapshot.sources))
        queue.put_nowait(snapshot)
        self._last_published = snapshot
        return True

    async def fetch(self, client: ResilientClient) -> Snapshot:
        url = f"{self.config.backend_url}{WORKSPACE_CONFIG_PATH}"
        response = await client.get(url, auth=(self.config.workspace_token, ""))
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise WorkspaceConfigError("Workspace config response is not JSON") from exc
        if not isinstance(payload, dict):
            raise WorkspaceConfigError("Unexpected workspace config payload")
        return parse_snapshot(payload)


if TYPE_CHECKING:
    _feed_check: SnapshotFeed = WorkspaceConfigPoller()
