"""Exception-to-HTTP-response mappings.

Every error response has the shape
``{"error": {"kind": "<machine readable>", "message": "<human readable>"}}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bandlab.domain.error import (
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    """Render an error body."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"kind": kind, "message": message}},
    )


def _describe_request_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers that map domain errors to HTTP responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logfire.info("Request rejected", path=request.url.path, error=exc.message)
        return error_response(status.HTTP_400_BAD_REQUEST, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            ValidationError.kind,
            _describe_request_error(exc),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_response(status.HTTP_404_NOT_FOUND, exc.kind, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logfire.error(
            "Storage failure",
            path=request.url.path,
            error=exc.message,
            retryable=exc.retryable,
        )
        status_code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if exc.retryable
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return error_response(
            status_code, exc.kind, "The request could not be stored, try again later"
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logfire.error("Unhandled domain error", path=request.url.path, kind=exc.kind)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal error"
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logfire.exception("Unexpected error", path=request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal error"
        )
