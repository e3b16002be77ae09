from __future__ import annotations

import logging

from staffqueue.schemas.catalog import (
    ServiceCreateRequest,
    ServiceDeleteRequest,
    ServiceListRequest,
    ServiceListResponse,
    ServiceUpdateRequest,
)
from staffqueue.schemas.entities import Service
from staffqueue.schemas.snapshot import ChangeSet
from staffqueue.services.base import OwnerScopedService

logger = logging.getLogger(__name__)


class CatalogService(OwnerScopedService):
    """Services offered by an owner and the skill each one requires."""

    async def create(self, request: ServiceCreateRequest) -> Service:
        owner_id = self._owner(request.owner_id)
        logger.info("Creating service %s", request.name)
        service = Service(
            id=self._provider.new_id("SRV"),
            owner_id=owner_id,
            name=request.name,
            duration=request.duration,
            required_staff_type=request.required_staff_type,
        )
        await self._provider.commit(
            owner_id,
            ChangeSet(
                services=[service],
                activity=[self._activity(owner_id, "service_created", f'Service "{service.name}" created')],
            ),
        )
        return service

    async def update(self, request: ServiceUpdateRequest) -> Service:
        owner_id = self._owner(request.owner_id)
        logger.info("Updating service %s", request.service_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_service(snapshot, request.service_id)
        updated = existing.model_copy(
            update=request.model_dump(
                include={"name", "duration", "required_staff_type"},
                exclude_none=True,
            )
        )
        await self._provider.commit(
            owner_id,
            ChangeSet(
                services=[updated],
                activity=[self._activity(owner_id, "service_updated", f'Service "{updated.name}" updated')],
            ),
        )
        return updated

    async def delete(self, request: ServiceDeleteRequest) -> Service:
        """Remove a service. Appointments still pointing at it are left as they are."""

        owner_id = self._owner(request.owner_id)
        logger.info("Deleting service %s", request.service_id)
        snapshot = await self._provider.load_snapshot(owner_id)
        existing = self._require_service(snapshot, request.service_id)
        await self._provider.commit(
            owner_id,
            ChangeSet(
                deleted_service_ids=[existing.id],
                activity=[self._activity(owner_id, "service_deleted", f'Service "{existing.name}" deleted')],
            ),
        )
        return existing

    async def list(self, request: ServiceListRequest) -> ServiceListResponse:
        snapshot = await self._provider.load_snapshot(self._owner(request.owner_id))
        return ServiceListResponse(total=len(snapshot.services), items=snapshot.services)
