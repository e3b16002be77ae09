from fastapi import APIRouter, Depends

from staffqueue.dependencies.services import get_booking_service
from staffqueue.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentDeleteRequest,
    AppointmentDeleteResponse,
    AppointmentListRequest,
    AppointmentListResponse,
    AppointmentResult,
    AppointmentStatusRequest,
    AppointmentUpdateRequest,
    ConflictCheckRequest,
    ConflictCheckResponse,
)
from staffqueue.services import BookingService
from staffqueue.services.exceptions import ServiceError
from staffqueue.tools.errors import to_http_exception

router = APIRouter()


@router.post("/create", response_model=AppointmentResult)
async def create_appointment(
    req: AppointmentCreateRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.create(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/update", response_model=AppointmentResult)
async def update_appointment(
    req: AppointmentUpdateRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.update(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/status", response_model=AppointmentResult)
async def set_appointment_status(
    req: AppointmentStatusRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.set_status(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/delete", response_model=AppointmentDeleteResponse)
async def delete_appointment(
    req: AppointmentDeleteRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.delete(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/list", response_model=AppointmentListResponse)
async def list_appointments(
    req: AppointmentListRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.list(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/conflicts", response_model=ConflictCheckResponse)
async def check_conflict(
    req: ConflictCheckRequest,
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.check_conflict(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
