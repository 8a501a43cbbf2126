"""Exception handlers mapping domain errors to HTTP responses.

Every error body has the same shape:

    {"success": false, "error": "<kind>", "detail": "<message>"}
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from guestbook.domain.error import (
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    StoreError,
    TooManyRequestsError,
    UnauthenticatedError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateError: status.HTTP_409_CONFLICT,
    TooManyRequestsError: status.HTTP_429_TOO_MANY_REQUESTS,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> JSONResponse:
    """Render a domain error."""
    status_code = next(
        (code for cls, code in STATUS_BY_ERROR.items() if isinstance(error, cls)),
        status.HTTP_400_BAD_REQUEST,
    )
    headers = None
    if isinstance(error, TooManyRequestsError):
        headers = {"Retry-After": str(error.window_seconds)}
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error.kind, "detail": str(error)},
        headers=headers,
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    logfire.info(
        "Request rejected",
        kind=exc.kind,
        path=request.url.path,
        detail=str(exc),
    )
    return error_response(exc)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    detail = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        detail = f"{location}: {first.get('msg', 'invalid')}"
    return error_response(ValidationError(detail))


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Driver messages may leak schema or data; log them, never return them
    logfire.error("Store failure", path=request.url.path, error=str(exc))
    return error_response(StoreError("Storage temporarily unavailable"))


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
