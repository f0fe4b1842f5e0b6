"""Per-request correlation id for log tracing.

Every request gets an id, either from the incoming X-Request-ID header or a
fresh uuid4. The id lives in a ContextVar for the duration of the request so
log records emitted anywhere below the middleware carry it, and it is echoed
back in the X-Request-ID response header. It plays no part in auth decisions.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LEN = 128

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

logger = logging.getLogger(__name__)


def get_correlation_id() -> str | None:
    """Return the id bound to the current request, or None outside a request."""
    return _correlation_id.get()


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def _incoming_id(request: Request) -> str | None:
    value = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if not value or len(value) > MAX_REQUEST_ID_LEN or not value.isprintable():
        return None
    return value


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id and log request/response lines around each call."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = _incoming_id(request) or new_correlation_id()
        token = _correlation_id.set(correlation_id)
        request.state.correlation_id = correlation_id
        method, path = request.method, request.url.path
        start = time.perf_counter()
        try:
            logger.info("%s %s - Request received", method, path)
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s - Response sent with status %s in %.1fms",
                method,
                path,
                response.status_code,
                elapsed_ms,
            )
            response.headers[REQUEST_ID_HEADER] = correlation_id
            return response
        finally:
            _correlation_id.reset(token)
