"""Global exception handlers: domain errors, validation errors, and a catch-all.

Auth failures answer with a fixed public message; the specific reason is
logged server-side (the log record carries the correlation id). Unexpected
errors become a generic 500 and never leak internals.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_api.core.correlation import REQUEST_ID_HEADER, get_correlation_id
from todo_api.core.errors import AppError, AuthenticationError

logger = logging.getLogger(__name__)


def _correlation_id(request: Request) -> str | None:
    return get_correlation_id() or getattr(request.state, "correlation_id", None)


def _body(request: Request, detail: object, code: str) -> dict:
    return {"detail": detail, "code": code, "correlationId": _correlation_id(request)}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_body(request, exc.detail, exc.code),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Validation failed on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_body(request, jsonable_encoder(exc.errors()), "validation_failed"),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        # Runs outside CorrelationIdMiddleware, so the header is set here.
        correlation_id = _correlation_id(request)
        logger.error(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
            extra={"correlation_id": correlation_id},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_body(request, "Internal server error", "internal_error"),
            headers={REQUEST_ID_HEADER: correlation_id} if correlation_id else None,
        )
