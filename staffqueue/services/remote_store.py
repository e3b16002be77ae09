from __future__ import annotations

import logging
from typing import List
from uuid import uuid4

from pydantic import ValidationError

from staffqueue.clients.backend import BackendClient
from staffqueue.schemas.entities import ActivityLogEntry
from staffqueue.schemas.snapshot import ChangeSet, Snapshot
from staffqueue.services.exceptions import ServiceError

logger = logging.getLogger(__name__)


class RemoteSnapshotProvider:
    """Snapshot provider backed by the remote REST backend.

    The backend is expected to expose ``GET /owners/{owner}/snapshot``,
    ``POST /owners/{owner}/commit`` (applied in one transaction) and
    ``GET /owners/{owner}/activity``.
    """

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid4().hex[:12]}"

    async def load_snapshot(self, owner_id: str) -> Snapshot:
        data = await self._client.get(f"/owners/{owner_id}/snapshot")
        try:
            return Snapshot.model_validate({"owner_id": owner_id, **data})
        except ValidationError as exc:
            logger.exception("Backend snapshot for %s failed validation", owner_id)
            raise ServiceError("Backend returned a malformed snapshot", cause=exc) from exc

    async def commit(self, owner_id: str, changes: ChangeSet) -> None:
        if changes.is_empty:
            return
        await self._client.post(
            f"/owners/{owner_id}/commit",
            changes.model_dump(mode="json"),
        )

    async def recent_activity(self, owner_id: str, limit: int) -> List[ActivityLogEntry]:
        data = await self._client.get(f"/owners/{owner_id}/activity", params={"limit": limit})
        items = data.get("items", []) if isinstance(data, dict) else data
        return [ActivityLogEntry.model_validate(item) for item in items][:limit]
