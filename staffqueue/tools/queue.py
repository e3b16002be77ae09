from fastapi import APIRouter, Depends

from staffqueue.dependencies.services import get_booking_service
from staffqueue.schemas.queue import (
    QueueAssignRequest,
    QueueAssignResponse,
    QueueDrainRequest,
    QueueDrainResponse,
    QueueListRequest,
    QueueListResponse,
)
from staffqueue.services import BookingService
from staffqueue.services.exceptions import ServiceError
from staffqueue.tools.errors import to_http_exception

router = APIRouter()


@router.post("/list", response_model=QueueListResponse)
async def list_queue(
    req: QueueListRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.queue(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/assign", response_model=QueueAssignResponse)
async def assign_from_queue(
    req: QueueAssignRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.assign_from_queue(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/drain", response_model=QueueDrainResponse)
async def drain_queue(
    req: QueueDrainRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.drain_queue(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
