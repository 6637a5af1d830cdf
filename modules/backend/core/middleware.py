"""
Request Context Middleware.

Tags every request with an ID and the calling frontend, times it, and makes
both visible to the logs of everything that runs while it is handled.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from modules.backend.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
FRONTEND_HEADER = "X-Frontend-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"

# Subset of VALID_SOURCES in logging.py
KNOWN_FRONTENDS = {"web", "cli", "tui", "mobile", "api", "internal"}


def _frontend_of(request: Request) -> str:
    value = request.headers.get(FRONTEND_HEADER, "").lower()
    return value if value in KNOWN_FRONTENDS else "unknown"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request ID, frontend and timing for every request.

    The request ID is taken from X-Request-ID or generated, and echoed back.
    X-Frontend-ID is one of KNOWN_FRONTENDS, anything else becomes
    "unknown". Handlers read both from request.state; logs get them through
    structlog contextvars.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        frontend = _frontend_of(request)
        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={"duration_ms": _elapsed_ms(start), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(start)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[RESPONSE_TIME_HEADER] = f"{duration_ms}ms"
            logger.debug(
                "Request handled",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
