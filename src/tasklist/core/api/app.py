"""
FastAPI application setup for tasklist.

`create_app` builds the app around an explicitly supplied storage
backend, so each app (and each test) owns its own task collection.
"""

import logging
import time
import traceback
from collections.abc import Awaitable, Callable
from enum import Enum

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist import __version__
from tasklist.core.api.routes import tasks
from tasklist.core.config.loader import load_config
from tasklist.core.config.models import TasklistConfig
from tasklist.core.tasks.backend import TaskStorage, get_backend

logger = logging.getLogger(__name__)


# Error codes for consistent error responses
class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    error_code: ErrorCode
    details: list[dict] | None = None


def _error_code_for(status_code: int) -> ErrorCode:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return ErrorCode.METHOD_NOT_ALLOWED
    if status_code >= 500:
        return ErrorCode.INTERNAL_ERROR
    return ErrorCode.INVALID_REQUEST


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Render an HTTPException as {"error": ..., "error_code": ...}.

    Server errors are logged at error level, client errors at info.
    """
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    log = logger.error if exc.status_code >= 500 else logger.info
    log("HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, message)

    body = ErrorResponse(error=message, error_code=_error_code_for(exc.status_code))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation failures.

    Covers malformed JSON as well as bodies that don't match the input
    models. Returns 400 with the validator's error list under "details".
    """
    errors = jsonable_encoder(exc.errors())
    logger.info(
        "Validation error on %s %s: %s", request.method, request.url.path, errors
    )

    body = ErrorResponse(
        error="Invalid task data",
        error_code=ErrorCode.VALIDATION_ERROR,
        details=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle anything that escaped a route.

    Logs the full traceback but returns a generic message; no detail
    about the cause reaches the client.
    """
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        str(exc),
        traceback.format_exc(),
    )

    body = ErrorResponse(error="Internal server error", error_code=ErrorCode.INTERNAL_ERROR)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _add_request_logging(app: FastAPI) -> None:
    """Log one line per /api request: method, path, status and duration."""

    @app.middleware("http")
    async def log_api_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s %d in %.0fms",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        return response


def create_app(
    storage: TaskStorage | None = None,
    config: TasklistConfig | None = None,
) -> FastAPI:
    """
    Create the tasklist FastAPI app.

    Args:
        storage: Storage backend to serve. Defaults to a new instance of
            the configured backend.
        config: Configuration to use. Defaults to load_config().

    Returns:
        Configured FastAPI application

    Example:
        >>> from tasklist.core.tasks import MemoryBackend
        >>> app = create_app(storage=MemoryBackend())
    """
    if config is None:
        config = load_config()
    if storage is None:
        storage = get_backend(config.storage.backend)

    app = FastAPI(
        title="Tasklist API",
        description="REST API for creating, listing, updating and deleting tasks",
        version=__version__,
    )
    app.state.storage = storage
    app.state.config = config

    if config.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.logging.log_requests:
        _add_request_logging(app)

    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)

    return app
