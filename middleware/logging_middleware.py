from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import time
from typing import Callable

from utils.correlation_id import clear_correlation_id, new_correlation_id, set_correlation_id
from utils.logger import setup_logger

logger = setup_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
DURATION_HEADER = "X-Request-Duration-Ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags every request with a correlation id and logs its start, end and duration.

    The id is taken from the incoming header when present and is visible to every
    log line emitted while the request is handled.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id

        start_time = time.time()
        logger.info(
            "Request started",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client_host": request.client.host if request.client else None
            }
        )

        try:
            response = await call_next(request)

            duration_ms = round((time.time() - start_time) * 1000, 2)
            logger.info(
                "Request completed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms
                }
            )

            response.headers[CORRELATION_HEADER] = correlation_id
            response.headers[DURATION_HEADER] = str(duration_ms)
            return response
        finally:
            clear_correlation_id()
