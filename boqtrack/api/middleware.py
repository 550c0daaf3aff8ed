import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from boqtrack.common.logging import get_logger

logger = get_logger("middleware")

# Forecast payloads can carry tens of thousands of progress records
SLOW_REQUEST_MS = 2000.0


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        log = logger.warning if elapsed_ms >= SLOW_REQUEST_MS else logger.info
        log(
            "%s %s -> %d in %.1fms (%s bytes in)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.headers.get("content-length", "0"),
        )

        response.headers["X-Request-Duration-Ms"] = f"{elapsed_ms:.1f}"
        return response
