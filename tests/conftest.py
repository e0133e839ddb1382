from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.support.registry import FakeRegistry

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def workspace_payload() -> dict[str, object]:
    return {
        "sources": [
            {
                "id": "src-1",
                "name": "Billing",
                "enabled": True,
                "deleted": False,
                "config": {"accountId": "acct_1", "resources": ["charges", "customers"]},
                "sourceDefinition": {"name": "stripe", "category": "cloud"},
                "destinations": [
                    {
                        "id": "dst-1",
                        "name": "Warehouse",
                        "enabled": True,
                        "deleted": False,
                        "isConnectionEnabled": True,
                        "isProcessorEnabled": True,
                        "config": {"host": "db.internal", "port": "5432", "user": "loader"},
                        "destinationDefinition": {"name": "POSTGRES"},
                    }
                ],
            },
            {
                "id": "src-2",
                "name": "Website",
                "config": {},
                "sourceDefinition": {"name": "javascript", "category": None},
                "destinations": None,
            },
        ]
    }


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for name in (
        "REGISTRY_URL",
        "REGISTRY_MAX_CALLS_PER_SECOND",
        "CONFIG_BACKEND_URL",
        "WORKSPACE_TOKEN",
        "CONFIG_POLL_INTERVAL_SECONDS",
        "PIPESYNC_ELIGIBLE_CATEGORY",
        "PIPESYNC_ACTION_CONCURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
