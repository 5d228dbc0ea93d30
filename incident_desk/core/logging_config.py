"""Process-wide logging setup and per-request access logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"

request_logger = logging.getLogger("incident_desk.request")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request: method, path, status and latency."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            latency_ms = int((time.perf_counter() - start) * 1000)
            request_logger.info(
                "HTTP %s %s %s %sms",
                request.method,
                request.url.path,
                status_code,
                latency_ms,
            )
