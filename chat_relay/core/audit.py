"""
Audit Middleware - One log line per request.

Each line records method, path, status, duration, request body size and
client address. Health probes and CORS/OPTIONS traffic are logged at
DEBUG so they do not drown out chat requests; otherwise the level follows
the status (5xx ERROR, 4xx WARNING, else INFO).
"""
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from chat_relay.core.logging_config import get_logger

logger = get_logger(__name__)

QUIET_PATHS = ("/",)
QUIET_METHODS = ("HEAD", "OPTIONS")


class AuditMiddleware(BaseHTTPMiddleware):
    """
    Logs every request and sets the X-Response-Time header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        bytes_in = request.headers.get("content-length", "0")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"REQUEST FAILED: {request.method} {request.url.path} "
                f"bytes_in={bytes_in} client={client_ip} "
                f"duration={time.perf_counter() - started:.3f}s error={e!r}"
            )
            raise

        duration = time.perf_counter() - started
        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        log_fn = self._log_fn(request, response.status_code)
        log_fn(
            f"REQUEST: {request.method} {request.url.path} "
            f"status={response.status_code} bytes_in={bytes_in} "
            f"duration={duration:.3f}s client={client_ip}"
        )
        return response

    @staticmethod
    def _log_fn(request: Request, status_code: int) -> Callable[..., None]:
        if status_code >= 500:
            return logger.error
        if request.method in QUIET_METHODS or (
            request.url.path in QUIET_PATHS and status_code < 400
        ):
            return logger.debug
        if status_code >= 400:
            return logger.warning
        return logger.info
