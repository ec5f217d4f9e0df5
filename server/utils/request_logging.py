"""
Request Logging Middleware
==========================
Logs every HTTP request with status and duration (http transport only).
"""

import time
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code and duration for each request"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        client = request.client.host if request.client else "unknown"
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                f"[HTTP] {request.method} {request.url.path} from {client} failed after {duration_ms:.1f}ms"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"[HTTP] {request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.1f}ms) from {client}"
        )
        return response
