from contextlib import asynccontextmanager
import logging
from typing import Callable, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reservation_gateway.clients.backend import BackendClient
from reservation_gateway.config import get_settings
from reservation_gateway.dependencies.services import (
    reservation_clients,
    routing_clients,
)
from reservation_gateway.health import router as health_router
from reservation_gateway.routes.reservation import router as reservation_router
from reservation_gateway.routes.routing import router as routing_router


def configure_logging() -> None:
    """Apply the configured log level, installing a handler if none exists."""
    level = getattr(logging, get_settings().log_level, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(level)

# Configure logging as soon as the module is loaded
configure_logging()

logger = logging.getLogger(__name__)


def backend_lifespan(clients: Callable[[], List[BackendClient]]):
    """Build a lifespan that opens the variant's backend clients once per process."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup Logic ---
        settings = get_settings()
        logger.info("Application settings on startup: %s", settings.model_dump())

        backends = clients()
        for backend in backends:
            logger.info("Backend %s -> %s", backend.name, backend.base_url)
        logger.info("Application startup complete.")

        try:
            yield  # The application is now running
        finally:
            # --- Shutdown Logic ---
            logger.info("Closing backend client connections.")
            for backend in backends:
                await backend.close()
            logger.info("Application shutdown complete.")

    return lifespan


async def invalid_payload_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(router, clients: Callable[[], List[BackendClient]], *, title: str) -> FastAPI:
    application = FastAPI(
        title=title,
        lifespan=backend_lifespan(clients),
        redirect_slashes=False,
    )
    application.add_exception_handler(RequestValidationError, invalid_payload_handler)

    # --- Include Routers ---

    application.include_router(router, prefix="/healthcare")
    application.include_router(health_router)
    return application


# --- Application Setup ---

settings = get_settings()

# Reservation orchestrator: reserve, fetch fee, settle payment.
app = create_app(reservation_router, reservation_clients, title=settings.app_name)

# Content-based router: forward the reservation to the hospital's own service.
routing_app = create_app(routing_router, routing_clients, title=f"{settings.app_name} (routing)")
