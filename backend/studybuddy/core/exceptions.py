"""
Custom exception classes for unified error handling.

Every error leaves the API as ``{"error": "<message>"}``; the handlers
registered in ``studybuddy.main`` do the conversion.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppBaseError(Exception):
    """Base exception for all application errors."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(AppBaseError):
    """Raised when a resource is missing or owned by another user."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Document"):
        super().__init__(message=f"{resource} not found")


class ValidationFailedError(AppBaseError):
    """Raised for domain validation failures (missing fields, size limits, empty content)."""
    status_code = status.HTTP_400_BAD_REQUEST


class EmbeddingError(AppBaseError):
    """Raised when the embedding provider returns nothing usable."""

    def __init__(self, original_error: str):
        super().__init__(
            message="Failed to generate embedding",
            detail=original_error,
        )


class GenerationParseError(AppBaseError):
    """Raised when LLM output does not contain the expected JSON array."""

    def __init__(self, what: str, original_error: str | None = None):
        super().__init__(
            message=f"Failed to parse generated {what}",
            detail=original_error,
        )


# ── Utility: convert to HTTPException ────────────────────

def app_error_to_http(error: AppBaseError) -> HTTPException:
    """Convert an AppBaseError to an HTTPException carrying its status code."""
    return HTTPException(status_code=error.status_code, detail=error.message)


# ── Exception handlers (registered in main.create_app) ───

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def app_error_handler(request: Request, exc: AppBaseError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"❌ {type(exc).__name__} on {request.url.path}: {exc.message} ({exc.detail})")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation problems are client errors: 400, not 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )
