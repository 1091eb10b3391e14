"""
FastAPI application for gateway device control.
"""

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ahactl.database import close_db, init_db
from ahactl.errors import (
    AggregateError,
    ConfigurationError,
    DirectoryFetchError,
    UnknownDeviceError,
)
from ahactl.utils.logging import bind_request, setup_logging, get_logger
from ahactl.routes import config, control, devices, health

VERSION = "1.0.0"

# Load environment variables
load_dotenv()

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    setup_logging(
        os.getenv("LOG_LEVEL", "WARNING"),
        os.getenv("LOG_FORMAT", "json")
    )
    log.info("application_starting", version=VERSION)

    # Initialize database (optional - use Alembic in production)
    if os.getenv("INIT_DB", "false").lower() == "true":
        log.info("initializing_database")
        await init_db()

    log.info("application_ready")

    yield

    log.info("application_shutting_down")
    await close_db()
    log.info("application_stopped")


app = FastAPI(
    title="AHA Gateway Control",
    version=VERSION,
    description="Switch, toggle and set temperature of smart-home devices by name",
    lifespan=lifespan
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every event logged during the request with its id; echo the id back."""
    request_id = bind_request(
        request.method,
        request.url.path,
        request.headers.get("x-request-id")
    )
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert Pydantic validation errors to clean, user-friendly messages.
    """
    error_messages = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field = " -> ".join(str(l) for l in loc if l != "body")
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation failed",
            "details": error_messages
        }
    )


@app.exception_handler(UnknownDeviceError)
async def unknown_device_handler(request: Request, exc: UnknownDeviceError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": str(exc),
            "device": exc.name,
            "available": exc.available
        }
    )


@app.exception_handler(DirectoryFetchError)
async def directory_fetch_handler(request: Request, exc: DirectoryFetchError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": str(exc)}
    )


@app.exception_handler(AggregateError)
async def aggregate_error_handler(request: Request, exc: AggregateError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": str(exc),
            "failed": exc.failed_devices
        }
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    log.error("gateway_not_configured", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)}
    )


app.include_router(devices.router, tags=["Devices"])
app.include_router(control.router, tags=["Control"])
app.include_router(health.router, tags=["Health"])
app.include_router(config.router, tags=["Config"])


@app.get("/healthz")
async def healthz():
    """
    Liveness check.
    No authentication required.

    Returns:
        dict: {"ok": true}
    """
    return {"ok": True}


@app.get("/")
async def root():
    """
    Root endpoint - basic info.

    Returns:
        dict: Application information
    """
    return {
        "ok": True,
        "name": "AHA Gateway Control",
        "version": VERSION,
        "status": "operational"
    }
