from fastapi import APIRouter, Depends

from staffqueue.dependencies.services import get_catalog_service
from staffqueue.schemas.catalog import (
    ServiceCreateRequest,
    ServiceDeleteRequest,
    ServiceListRequest,
    ServiceListResponse,
    ServiceUpdateRequest,
)
from staffqueue.schemas.entities import Service
from staffqueue.services import CatalogService
from staffqueue.services.exceptions import ServiceError
from staffqueue.tools.errors import to_http_exception

router = APIRouter()


@router.post("/create", response_model=Service)
async def create_service(
    req: ServiceCreateRequest,
    catalog: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog.create(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/update", response_model=Service)
async def update_service(
    req: ServiceUpdateRequest,
    catalog: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog.update(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/delete", response_model=Service)
async def delete_service(
    req: ServiceDeleteRequest,
    catalog: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog.delete(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/list", response_model=ServiceListResponse)
async def list_services(
    req: ServiceListRequest,
    catalog: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog.list(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
