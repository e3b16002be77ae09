from typing import Optional

from fastapi import APIRouter, Depends

from staffqueue.dependencies.services import get_staff_service
from staffqueue.schemas.staff import (
    StaffAvailabilityRequest,
    StaffChangeResponse,
    StaffCreateRequest,
    StaffDeleteRequest,
    StaffListRequest,
    StaffListResponse,
    StaffTypesResponse,
    StaffUpdateRequest,
)
from staffqueue.services import StaffService
from staffqueue.services.exceptions import ServiceError
from staffqueue.tools.errors import to_http_exception

router = APIRouter()


@router.post("/create", response_model=StaffChangeResponse)
async def create_staff(
    req: StaffCreateRequest,
    service: StaffService = Depends(get_staff_service),
):
    try:
        return await service.create(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/update", response_model=StaffChangeResponse)
async def update_staff(
    req: StaffUpdateRequest,
    service: StaffService = Depends(get_staff_service),
):
    try:
        return await service.update(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/delete", response_model=StaffChangeResponse)
async def delete_staff(
    req: StaffDeleteRequest,
    service: StaffService = Depends(get_staff_service),
):
    try:
        return await service.delete(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/availability", response_model=StaffChangeResponse)
async def set_staff_availability(
    req: StaffAvailabilityRequest,
    service: StaffService = Depends(get_staff_service),
):
    try:
        return await service.set_availability(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/list", response_model=StaffListResponse)
async def list_staff(
    req: StaffListRequest,
    service: StaffService = Depends(get_staff_service),
):
    try:
        return await service.list_with_load(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.get("/types", response_model=StaffTypesResponse)
async def list_staff_types(
    owner_id: Optional[str] = None,
    service: StaffService = Depends(get_staff_service),
):
    try:
        return await service.known_types(owner_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
