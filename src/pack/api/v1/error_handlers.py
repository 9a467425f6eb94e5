"""
FastAPI exception handlers that turn raised errors into the uniform error envelope.

Status codes and public messages are decided by the exception classes
(`AppError.http_status()` / `AppError.public_message()`); these handlers only log
and render. Register them from the app factory with `register_exception_handlers(app)`.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pack.exceptions.base import GENERIC_ERROR_MESSAGE, AppError, ValidationFailedError, error_payload

logger = logging.getLogger(__name__)


def _location(loc) -> str:
    # drop the "body"/"path"/"query" prefix FastAPI puts first
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts) or "request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status = exc.http_status()
    if status >= 500:
        logger.error(
            "http.app_error",
            extra={"method": request.method, "path": request.url.path, "status": status},
            exc_info=exc,
        )
    else:
        logger.warning(
            "http.client_error",
            extra={"method": request.method, "path": request.url.path, "status": status, "error": str(exc)},
        )
    return JSONResponse(status_code=status, content=exc.to_payload(request.url.path))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    400 Bad Request for malformed path/query parameters, with one detail per field.
    """
    details = [f"{_location(err.get('loc', ()))}: {err.get('msg', 'invalid value')}" for err in exc.errors()]
    logger.warning(
        "http.request_validation",
        extra={"method": request.method, "path": request.url.path, "details": details},
    )
    return JSONResponse(
        status_code=400,
        content=error_payload(400, ValidationFailedError.DEFAULT_MESSAGE, request.url.path, details=details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Framework errors (unknown route, wrong method, malformed multipart) in the same envelope.
    """
    message = exc.detail if isinstance(exc.detail, str) else GENERIC_ERROR_MESSAGE
    if exc.status_code >= 500:
        message = GENERIC_ERROR_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(exc.status_code, message, request.url.path),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort: anything not raised on purpose becomes a 500 with a generic message.
    """
    logger.error(
        "http.unhandled_error",
        extra={"method": request.method, "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_payload(500, GENERIC_ERROR_MESSAGE, request.url.path),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
