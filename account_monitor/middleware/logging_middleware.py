"""Request/response logging middleware."""
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request",
            method=request.method,
            path=request.url.path,
            query=request.url.query or None,
            status=response.status_code,
            duration_ms=elapsed_ms,
        )
        return response
