"""
Exception handlers that render every failure as an ErrorResponse body.

Commands and repositories raise AppException subclasses or let
SQLAlchemyError propagate; FastAPI raises RequestValidationError before an
endpoint runs. The handlers registered here turn all of them into the
common error envelope:

    400  validation failures and invalid references
    404  unknown ids and unknown routes
    500  database and unexpected errors, with an opaque message
"""

from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.exceptions import AppException, DatabaseError
from bookshelf.logging import logger
from bookshelf.schemas.errors import ErrorResponse, ErrorSource, ValidationDetail
from bookshelf.utils.metrics import app_errors_total, db_query_errors_total

# FastAPI error location prefix -> request source reported to clients
LOCATION_SOURCES = {
    "query": ErrorSource.QUERY,
    "path": ErrorSource.PARAMS,
    "body": ErrorSource.PAYLOAD,
}


def _json(error: ErrorResponse) -> JSONResponse:
    app_errors_total.labels(
        error_type=error.error, status_code=error.status_code
    ).inc()
    return JSONResponse(status_code=error.status_code, content=error.to_content())


def validation_error_response(errors: list[dict[str, Any]]) -> ErrorResponse:
    """
    Build a 400 body from pydantic error dicts.

    The source is taken from the first error; keys are the distinct field
    names reported for that source, in order of appearance.

    Args:
        errors: ``RequestValidationError.errors()``.

    Returns:
        ErrorResponse with ``validation`` set.
    """
    first_loc = errors[0]["loc"] if errors else ("body",)
    source = LOCATION_SOURCES.get(first_loc[0], ErrorSource.PAYLOAD)

    keys: list[str] = []
    messages: list[str] = []
    for error in errors:
        loc = error["loc"]
        if LOCATION_SOURCES.get(loc[0], ErrorSource.PAYLOAD) != source:
            continue
        key = ".".join(str(part) for part in loc[1:])
        # Model-level errors may name the accepted keys in their context
        candidates = [key] if key else error.get("ctx", {}).get("keys", [])
        keys.extend(k for k in candidates if k not in keys)
        messages.append(f"{key}: {error['msg']}" if key else error["msg"])

    return ErrorResponse(
        error=HTTPStatus.BAD_REQUEST.phrase,
        message="; ".join(messages) or "Invalid request",
        validation=ValidationDetail(source=source, keys=keys),
        status_code=HTTPStatus.BAD_REQUEST.value,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc,
        )
    else:
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
            extra={"exception_type": type(exc).__name__},
        )
    return _json(exc.to_http_response())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = validation_error_response(list(exc.errors()))
    logger.warning(
        f"Rejected {request.method} {request.url.path}: {error.message}"
    )
    return _json(error)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    Log a failed query and answer with an opaque 500.

    The original error is never sent to the client.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    db_query_errors_total.labels(
        method=request.method, error_type=type(exc).__name__
    ).inc()
    return _json(DatabaseError(str(exc)).to_http_response())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing errors (unknown path, wrong method) in the common envelope."""
    error = ErrorResponse(
        error=HTTPStatus(exc.status_code).phrase,
        message=str(exc.detail),
        status_code=exc.status_code,
    )
    response = _json(error)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return _json(DatabaseError(str(exc)).to_http_response())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all error handlers on the application.

    Args:
        app: The FastAPI application.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
