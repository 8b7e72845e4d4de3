"""
Main FastAPI application
"""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from prometheus_client import make_asgi_app
import logging
import time
import uuid

from seatlock.config import Settings, settings as default_settings
from seatlock.core.exceptions import SeatlockException
from seatlock.core.logging import setup_logging
from seatlock.core.metrics import endpoint_label, record_request
from seatlock.api.v1 import api_router
from seatlock.schemas.response import ErrorDetail, ErrorResponse
from seatlock.services.expiry_sweeper import ExpiryReclaimer
from seatlock.services.seat_registry import SeatRegistry

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details or {}))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def log_startup_banner(settings: Settings, registry: SeatRegistry) -> None:
    last_row = chr(ord("A") + registry.rows - 1)
    prefix = settings.API_PREFIX
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.APP_ENV})")
    logger.info(
        f"Seat configuration: rows={registry.rows} (A-{last_row}), "
        f"seats_per_row={registry.seats_per_row}, total={registry.total_seats}, "
        f"lock_timeout={registry.lock_ttl_seconds}s"
    )
    logger.info(
        "Available endpoints: "
        f"GET {prefix}/seats, GET {prefix}/seats/{{seat_id}}, "
        f"POST {prefix}/seats/{{seat_id}}/lock, POST {prefix}/seats/{{seat_id}}/confirm, "
        f"DELETE {prefix}/seats/{{seat_id}}/unlock, GET {prefix}/bookings, "
        f"DELETE {prefix}/admin/reset"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    """
    settings: Settings = app.state.settings
    registry: SeatRegistry = app.state.seat_registry

    # Startup
    log_startup_banner(settings, registry)

    reclaimer = None
    if settings.SEAT_SWEEP_INTERVAL_SECONDS > 0:
        reclaimer = ExpiryReclaimer(registry, settings.SEAT_SWEEP_INTERVAL_SECONDS)
        reclaimer.start()

    yield

    # Shutdown
    logger.info("Shutting down application")
    if reclaimer is not None:
        await reclaimer.stop()


async def seatlock_exception_handler(request: Request, exc: SeatlockException):
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in errors]
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        message,
        {"fields": fields}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(exc.status_code, "NOT_FOUND", "Route not found")
    return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {exc}", exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal server error occurred"
    )


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[SeatRegistry] = None
) -> FastAPI:
    """
    Build the application around its own seat registry
    """
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Seat reservation service with time-bounded locks",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.seat_registry = registry or SeatRegistry.from_settings(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def track_requests(request: Request, call_next):
        """
        Track request metrics and add request ID
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        record_request(request.method, endpoint_label(request.scope), response.status_code, duration)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(duration)
        return response

    # Exception handlers
    app.add_exception_handler(SeatlockException, seatlock_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Mount Prometheus metrics endpoint
    if settings.PROMETHEUS_ENABLED:
        app.mount("/metrics", make_asgi_app())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "seatlock.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level=default_settings.LOG_LEVEL.lower()
    )
