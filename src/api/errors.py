"""Translation of domain errors into HTTP responses."""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.model.errors import (
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    InvalidOrExpiredError,
    NotFoundError,
    PayloadTooLargeError,
    PersistenceError,
    UnauthorizedError,
    UnsupportedMediaTypeError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

REFRESH_TOKEN_PATH = "/api/auth/refresh-token"

_CLIENT_ERRORS = (
    DuplicateError,
    NotFoundError,
    InvalidOrExpiredError,
    InvalidCredentialsError,
    UnsupportedMediaTypeError,
    PayloadTooLargeError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the status code and body the API promises."""
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(error), "errors": error.errors},
        )
    if isinstance(error, _CLIENT_ERRORS):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, UnauthorizedError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(error),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not isinstance(error, (UpstreamError, PersistenceError)):
        logger.error("Unmapped domain error", extra={"errorType": type(error).__name__, "error": str(error)})
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": "Server error", "error": str(error)},
    )


def _field_name(loc) -> str:
    names = [part for part in loc[1:] if isinstance(part, str)]
    return ".".join(names) or "body"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies with 400, or 401 on the refresh endpoint."""
    errors = exc.errors()
    logger.info("Rejected malformed request", extra={"path": request.url.path, "errorCount": len(errors)})

    if request.url.path == REFRESH_TOKEN_PATH:
        missing = any(e["type"] == "missing" for e in errors)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "No refresh token provided" if missing else "Invalid refresh token"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {
            "message": "Validation failed",
            "errors": [{"field": _field_name(e["loc"]), "message": e["msg"]} for e in errors],
        }},
    )
