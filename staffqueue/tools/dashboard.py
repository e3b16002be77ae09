from fastapi import APIRouter, Depends

from staffqueue.dependencies.services import get_dashboard_service
from staffqueue.schemas.dashboard import DashboardRequest, DashboardResponse
from staffqueue.services import DashboardService
from staffqueue.services.exceptions import ServiceError
from staffqueue.tools.errors import to_http_exception

router = APIRouter()


@router.post("/summary", response_model=DashboardResponse)
async def dashboard_summary(
    req: DashboardRequest,
    service: DashboardService = Depends(get_dashboard_service),
):
    try:
        return await service.summary(req)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
