from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staffqueue.config import get_settings
from staffqueue.dependencies.services import get_backend_client_cached
from staffqueue.health import router as health_router
from staffqueue.mcp_server import mcp
from staffqueue.mock_data_view import router as mock_data_router
from staffqueue.tools.appointment import router as appointment_router
from staffqueue.tools.catalog import router as catalog_router
from staffqueue.tools.dashboard import router as dashboard_router
from staffqueue.tools.queue import router as queue_router
from staffqueue.tools.staff import router as staff_router


def configure_logging() -> None:
    """Ensure application logs use the INFO level by default."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)


configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    settings = get_settings()
    settings_snapshot = settings.model_dump(exclude={"backend_token"})
    logger.info("Application settings on startup: %s", settings_snapshot)

    client = get_backend_client_cached()
    logger.info("Application startup complete (mock data: %s).", client.use_mock_data)

    try:
        yield
    finally:
        logger.info("Closing backend client connection.")
        await client.close()
        logger.info("Application shutdown complete.")


settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(appointment_router, prefix="/tools/appointments")
app.include_router(queue_router, prefix="/tools/queue")
app.include_router(staff_router, prefix="/tools/staff")
app.include_router(catalog_router, prefix="/tools/services")
app.include_router(dashboard_router, prefix="/tools/dashboard")
app.include_router(health_router)
app.include_router(mock_data_router)

# MCP Streamable HTTP server at /mcp
app.mount("/mcp", mcp.streamable_http_app())
