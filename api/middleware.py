"""Request context middleware using ContextVar.

Takes the request id from the X-Request-ID header (or generates one) and
stores it in a ContextVar so that every log record emitted while the
request is handled carries it, without passing it around explicitly.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api.errors import internal_error_response
from core.observability.logging_setup import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_id() -> str | None:
    """Return the id of the request being handled, if any."""
    return request_id_var.get()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id and log request start, completion and failure."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        request.state.request_id = request_id
        start = time.perf_counter()

        logger.info(
            "Request started",
            extra={"method": request.method, "path": request.url.path},
        )
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                # Logged here so the record still carries the request id
                logger.error(
                    "Request failed",
                    exc_info=True,
                    extra={
                        "exception_type": type(exc).__name__,
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": 500,
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    },
                )
                response = internal_error_response()
            else:
                logger.info(
                    "Request completed",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    },
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)
