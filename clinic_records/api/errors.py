"""Error taxonomy to HTTP status mapping.

Every route raises domain errors and lets the handlers registered here turn
them into responses, so a given kind of failure always gets the same status
and body shape: ``{"message": ...}`` plus ``"errors"`` for validation failures.

Security Impact:
    - StorageError responses carry a generic message; the driver error is
      only logged
    - Validation error details name fields and problems but never echo the
      submitted values (which may include passwords)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from clinic_records.domain.errors import (
    AuthenticationError,
    DuplicatePatientError,
    RecordNotFoundError,
    RecordsError,
    RecordValidationError,
    StorageError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: list[tuple[type[RecordsError], int]] = [
    (RecordNotFoundError, 404),
    (RecordValidationError, 400),
    (DuplicatePatientError, 400),
    (AuthenticationError, 400),
    (StorageError, 500),
]


def status_for_error(exc: RecordsError) -> int:
    """Map an error kind to its HTTP status. Unknown kinds are server errors."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_body(exc: RecordsError) -> dict:
    """Build the JSON body for an error response.

    Parameters:
        exc: Domain error being answered

    Returns:
        dict: ``{"message": ...}``, plus ``"errors"`` for validation failures
    """
    body: dict = {"message": exc.message}
    if isinstance(exc, RecordValidationError) and exc.errors:
        body["errors"] = exc.errors
    return body


def validation_error_from(exc: RequestValidationError) -> RecordValidationError:
    """Convert FastAPI's request validation failure into our validation kind."""
    errors = []
    for error in exc.errors():
        # loc is ("body", "field", ...) or ("path", "name")
        loc = [str(part) for part in error.get("loc", ())]
        errors.append({
            "field": ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc),
            "message": error.get("msg", "Invalid value"),
        })
    return RecordValidationError("Invalid request", errors=errors)


async def records_error_handler(request: Request, exc: RecordsError) -> JSONResponse:
    """Answer any domain error with its mapped status.

    Server errors are logged with the underlying driver exception; client
    errors are logged at INFO with their message only.

    Parameters:
        request: Request that failed
        exc: Domain error raised by the route or adapter

    Returns:
        JSONResponse: Error response with status from ``status_for_error``
    """
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} - {type(exc).__name__}",
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.info(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed bodies and parameters as 400 validation errors.

    Parameters:
        request: Request that failed validation
        exc: FastAPI's validation failure

    Returns:
        JSONResponse: 400 with field-level ``errors``
    """
    return await records_error_handler(request, validation_error_from(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Reshape framework HTTP errors (unknown route, wrong method) to ``{"message": ...}``.

    Parameters:
        request: Incoming request
        exc: Starlette HTTP exception

    Returns:
        JSONResponse: Same status and headers, message body
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application.

    Parameters:
        app: FastAPI application instance
    """
    app.add_exception_handler(RecordsError, records_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
