"""Access logging for the Reviewpool API.

Every request produces one ``request_completed`` (or ``request_failed``)
entry carrying the matched route template, the response status, the
error envelope code when the request was rejected, and the duration.
The correlation ID from ``X-Correlation-ID`` (or a fresh UUID) is bound
for the lifetime of the request so engine logs share it, and is echoed
back on the response.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from reviewpool.logging import get_logger, set_correlation_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"

logger = get_logger(__name__)


def route_template(request: Request) -> str:
    """The path pattern the request matched, or the raw path when unrouted."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one access entry per request, tagged with its correlation ID.

    Error handlers record the envelope code on ``request.state.error_code``;
    it is included for 4xx responses so rejected calls (``PR_MERGED``,
    ``NO_CANDIDATE``, ``UNAUTHORIZED``, ...) can be counted from the logs
    without parsing response bodies.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        set_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            # The traceback is logged by the unexpected-error handler.
            logger.error(
                "request_failed",
                method=request.method,
                route=route_template(request),
                duration_ms=elapsed_ms(started),
                error_type=type(exc).__name__,
            )
            raise
        else:
            response.headers[CORRELATION_HEADER] = correlation_id
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "request_completed",
                method=request.method,
                route=route_template(request),
                status_code=response.status_code,
                error_code=getattr(request.state, "error_code", None),
                duration_ms=elapsed_ms(started),
            )
            return response
        finally:
            set_correlation_id(None)
