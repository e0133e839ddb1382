"""Workspace configuration model: sources, their destinations and snapshots."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .values import ConfigMapping


@dataclass(frozen=True, slots=True, kw_only=True)
class Destination:
    """A destination attached to one source."""

    id: str
    definition_name: str
    name: str = ""
    deleted: bool = False
    enabled: bool = True
    is_connection_enabled: bool = True
    is_processor_enabled: bool = True
    config: ConfigMapping = field(default_factory=dict["str", "ConfigValue"])


@dataclass(frozen=True, slots=True, kw_only=True)
class Source:
    """A configured data source and the destinations it feeds."""

    id: str
    definition_name: str
    category: str
    name: str = ""
    deleted: bool = False
    enabled: bool = True
    config: ConfigMapping = field(default_factory=dict["str", "ConfigValue"])
    destinations: tuple[Destination, ...] = ()


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Complete point-in-time description of all sources.

    ``has_ever_been_set`` is false only for the placeholder held before the first
    snapshot arrives; such a snapshot is never diffed against.
    """

    sources: tuple[Source, ...] = ()
    has_ever_been_set: bool = True

    @classmethod
    def unset(cls) -> Snapshot:
        return cls(sources=(), has_ever_been_set=False)

    def eligible_sources(self, category: str) -> Iterator[Source]:
        return (source for source in self.sources if source.category == category)

    def integrity_issues(self) -> list[str]:
        """Describe duplicated identities that would make reconciliation ambiguous."""

        issues: list[str] = []
        source_counts = Counter(source.id for source in self.sources)
        issues.extend(
            f"source id {source_id!r} appears {count} times"
            for source_id, count in source_counts.items()
            if count > 1
        )
        for source in self.sources:
            destination_counts = Counter(destination.id for destination in source.destinations)
            issues.extend(
                f"destination id {destination_id!r} appears {count} times in source {source.id!r}"
                for destination_id, count in destination_counts.items()
                if count > 1
            )
        return issues
