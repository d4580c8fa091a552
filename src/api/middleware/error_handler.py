"""
Global exception handling middleware.
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.utils.exceptions import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from src.utils.logging_config import request_id_var
from ..config import config
from ..models.error import ErrorResponse

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI):
    """
    Register global exception handlers.

    Handles:
    - Domain errors (validation, not found, conflict, store failures)
    - HTTP Exceptions (FastAPI/Starlette)
    - Validation Errors (Pydantic)
    - Unhandled Server Errors
    """

    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        """Handle empty or missing required fields."""
        return _create_error_response(
            status_code=400,
            error="validation_error",
            message=str(exc),
            details={"fields": exc.fields} if exc.fields else None,
            request_id=getattr(request.state, "request_id", None)
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        """Handle references to resources the caller does not own."""
        return _create_error_response(
            status_code=404,
            error="not_found",
            message=str(exc),
            request_id=getattr(request.state, "request_id", None)
        )

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        """Handle duplicate natural keys."""
        return _create_error_response(
            status_code=409,
            error="conflict",
            message=str(exc),
            request_id=getattr(request.state, "request_id", None)
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        """Handle query executor and storage failures."""
        error_id = uuid.uuid4().hex
        logger.error(f"Store failure {error_id}: {exc}")

        message = str(exc) if config.EXPOSE_STORE_ERRORS else "A storage error occurred."
        return _create_error_response(
            status_code=500,
            error="store_error",
            message=message,
            details={"error_id": error_id},
            request_id=getattr(request.state, "request_id", None)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle standard HTTP exceptions."""
        return _create_error_response(
            status_code=exc.status_code,
            error=str(exc.status_code),
            message=str(exc.detail),
            request_id=getattr(request.state, "request_id", None),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors."""
        return _create_error_response(
            status_code=422,
            error="validation_error",
            message="Request validation failed",
            details={"errors": jsonable_encoder(exc.errors())},
            request_id=getattr(request.state, "request_id", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle catch-all unhandled exceptions."""
        error_id = uuid.uuid4().hex
        logger.error(f"Unhandled exception {error_id}: {exc}", exc_info=True)

        return _create_error_response(
            status_code=500,
            error="internal_server_error",
            message="An internal server error occurred.",
            details={"error_id": error_id},
            request_id=getattr(request.state, "request_id", None)
        )

    # Add middleware to ensure request_id exists if not already present
    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        if not hasattr(request.state, "request_id"):
            request.state.request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        token = request_id_var.set(request.state.request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request.state.request_id
        return response


def _create_error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict = None,
    request_id: str = None,
    headers: dict = None,
) -> JSONResponse:
    """Create standardized JSON error response."""
    content = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=request_id
    ).model_dump(exclude_none=True)

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
    )
