"""Holder of the snapshot most recently reconciled against the registry."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from pipesync.domain.model import Snapshot


@dataclass(slots=True)
class SnapshotStore:
    """Exactly one snapshot: what the registry was last told.

    Written only by the reconciliation loop after a pass completes.
    """

    current: Snapshot = field(default_factory=Snapshot.unset)

    @property
    def has_ever_been_set(self) -> bool:
        return self.current.has_ever_been_set

    def commit(self, snapshot: Snapshot) -> None:
        """Replace the stored snapshot; the previous one is discarded, not merged."""

        if not snapshot.has_ever_been_set:
            snapshot = replace(snapshot, has_ever_been_set=True)
        self.current = snapshot
