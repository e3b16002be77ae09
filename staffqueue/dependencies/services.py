from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from staffqueue.clients.backend import BackendClient
from staffqueue.config import Settings, get_settings
from staffqueue.services import (
    BookingService,
    CatalogService,
    DashboardService,
    StaffService,
)
from staffqueue.services.mock_store import get_mock_store
from staffqueue.services.ports import SnapshotProvider
from staffqueue.services.remote_store import RemoteSnapshotProvider


@lru_cache(maxsize=1)
def get_backend_client_cached() -> BackendClient:
    settings = get_settings()
    return BackendClient(
        str(settings.backend_base_url) if settings.backend_base_url else None,
        timeout=settings.backend_timeout,
        use_mock_data=settings.use_mock_data,
        token=settings.backend_token,
    )


def get_snapshot_provider(settings: Settings = Depends(get_settings)) -> SnapshotProvider:
    client = get_backend_client_cached()
    if client.use_mock_data:
        return get_mock_store(activity_limit=settings.activity_log_limit)
    return RemoteSnapshotProvider(client)


def get_booking_service(
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(provider, default_owner_id=settings.default_owner_id)


def get_staff_service(
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    settings: Settings = Depends(get_settings),
) -> StaffService:
    return StaffService(
        provider,
        default_owner_id=settings.default_owner_id,
        auto_drain_queue=settings.auto_drain_queue,
    )


def get_catalog_service(
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    settings: Settings = Depends(get_settings),
) -> CatalogService:
    return CatalogService(provider, default_owner_id=settings.default_owner_id)


def get_dashboard_service(
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    settings: Settings = Depends(get_settings),
) -> DashboardService:
    return DashboardService(
        provider,
        default_owner_id=settings.default_owner_id,
        recent_activity_limit=settings.recent_activity_limit,
    )
