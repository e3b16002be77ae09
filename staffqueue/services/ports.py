from __future__ import annotations

from typing import List, Protocol

from staffqueue.schemas.entities import ActivityLogEntry
from staffqueue.schemas.snapshot import ChangeSet, Snapshot


class SnapshotProvider(Protocol):
    """Storage seam used by the services; both the mock store and the remote backend implement it."""

    async def load_snapshot(self, owner_id: str) -> Snapshot:
        """Return the current services, staff and appointments of ``owner_id``."""

    async def commit(self, owner_id: str, changes: ChangeSet) -> None:
        """Persist every record in ``changes`` for ``owner_id``."""

    async def recent_activity(self, owner_id: str, limit: int) -> List[ActivityLogEntry]:
        """Return the newest activity entries first."""

    def new_id(self, prefix: str) -> str:
        """Return a fresh record identifier such as ``APT-00001``."""
