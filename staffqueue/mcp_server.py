# staffqueue/mcp_server.py
from __future__ import annotations

import logging

from mcp.server.fastmcp import Context, FastMCP

from staffqueue.config import get_settings
from staffqueue.dependencies.services import get_snapshot_provider
from staffqueue.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentResult,
    ConflictCheckRequest,
    ConflictCheckResponse,
)
from staffqueue.schemas.dashboard import DashboardRequest, DashboardResponse
from staffqueue.schemas.queue import (
    QueueAssignRequest,
    QueueAssignResponse,
    QueueListRequest,
    QueueListResponse,
)
from staffqueue.services import BookingService, DashboardService

log = logging.getLogger("staffqueue.mcp")

# Name shown to clients
mcp = FastMCP("staffqueue_mcp")


def _booking_service() -> BookingService:
    settings = get_settings()
    return BookingService(
        get_snapshot_provider(settings),
        default_owner_id=settings.default_owner_id,
    )


def _dashboard_service() -> DashboardService:
    settings = get_settings()
    return DashboardService(
        get_snapshot_provider(settings),
        default_owner_id=settings.default_owner_id,
        recent_activity_limit=settings.recent_activity_limit,
    )


@mcp.tool(name="appointments_check_conflict", description="Check whether a staff member is free for a slot")
async def appointments_check_conflict(input: ConflictCheckRequest, ctx: Context) -> ConflictCheckResponse:
    log.debug("appointments_check_conflict input=%s", input.model_dump(mode="json"))
    out = await _booking_service().check_conflict(input)
    log.debug("appointments_check_conflict output=%s", out.model_dump(mode="json"))
    return out


@mcp.tool(name="appointments_create", description="Book an appointment, auto-assigning staff or queueing it")
async def appointments_create(input: AppointmentCreateRequest, ctx: Context) -> AppointmentResult:
    log.debug("appointments_create input=%s", input.model_dump(mode="json"))
    out = await _booking_service().create(input)
    log.debug("appointments_create output=%s", out.model_dump(mode="json"))
    return out


@mcp.tool(name="queue_list", description="List the waiting queue in position order")
async def queue_list(input: QueueListRequest, ctx: Context) -> QueueListResponse:
    return await _booking_service().queue(input)


@mcp.tool(name="queue_assign", description="Assign a queued appointment to the first available staff member")
async def queue_assign(input: QueueAssignRequest, ctx: Context) -> QueueAssignResponse:
    log.debug("queue_assign input=%s", input.model_dump(mode="json"))
    out = await _booking_service().assign_from_queue(input)
    log.debug("queue_assign output=%s", out.model_dump(mode="json"))
    return out


@mcp.tool(name="dashboard_summary", description="Today's bookings, queue length and staff load")
async def dashboard_summary(input: DashboardRequest, ctx: Context) -> DashboardResponse:
    return await _dashboard_service().summary(input)


@mcp.tool(name="ping", description="Health check")
async def ping(message: str) -> str:
    log.debug("ping %s", message)
    return f"pong: {message}"
