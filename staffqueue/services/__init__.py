"""Service package public API definitions.

Service implementations are imported lazily. ``staffqueue.clients.backend``
imports ``staffqueue.services.exceptions``, which executes this module first;
importing the services eagerly here would pull the client back in and create
a circular import.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "BookingService",
    "CatalogService",
    "DashboardService",
    "StaffService",
]

_SERVICE_MODULES = {
    "BookingService": "booking",
    "CatalogService": "catalog",
    "DashboardService": "dashboard",
    "StaffService": "staff",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .booking import BookingService as BookingService
    from .catalog import CatalogService as CatalogService
    from .dashboard import DashboardService as DashboardService
    from .staff import StaffService as StaffService
