"""Exception handlers mapping domain errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.validation import format_pydantic_errors, to_validation_error
from domain.model.errors import (
    DomainError,
    DuplicateError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: DomainError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _validation_response(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Request validation failed", extra={"path": request.url.path, "field": exc.field})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "field": exc.field, "errors": exc.errors},
    )


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(ValidationError)
    async def _validation_handler(request: Request, exc: ValidationError):
        return _validation_response(request, exc)

    # Bodies FastAPI cannot decode never reach the route's parser
    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        errors = format_pydantic_errors(exc, source_prefixed=True)
        return _validation_response(request, to_validation_error(errors))

    @app.exception_handler(DomainError)
    async def _domain_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error": type(exc).__name__, "detail": str(exc)},
            )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
