"""Exception handlers that render every failure as the uniform error envelope."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppError, ErrorCode, InternalError, ValidationFailedError

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Sorry, the requested resource was not found."


def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def validation_errors_to_fields(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``[{field, message}]``; the request location prefix is dropped."""
    fields = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        fields.append({"field": field, "message": err.get("msg", "Invalid value")})
    return fields


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected failure with its traceback and render the generic 500 envelope."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(InternalError(cause=exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for domain errors, validation errors, routing errors and the catch-all."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        log_fn = logger.error if exc.status_code >= 500 else logger.info
        log_fn(
            "Request failed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
                "error_code": int(exc.error_code),
            },
        )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationFailedError(validation_errors_to_fields(list(exc.errors())))
        logger.info(
            "Request validation failed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "fields": [e["field"] for e in error.errors or []],
            },
        )
        return _error_response(error)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown routes and unsupported methods both surface as not found
        return JSONResponse(
            status_code=404,
            content={
                "message": ROUTE_NOT_FOUND_MESSAGE,
                "errorCode": int(ErrorCode.ROUTE_NOT_FOUND),
            },
        )

    # Only reached for failures outside RequestLogMiddleware; route errors are
    # rendered there so the response still passes through CORS.
    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        return internal_error_response(request, exc)
