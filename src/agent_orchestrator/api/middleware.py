"""HTTP request logging and counting."""

import threading

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..logging import get_logger

logger = get_logger(__name__)


class RequestCounter:
    """Thread-safe count of HTTP requests served."""

    def __init__(self):
        self._count = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        with self._lock:
            self._count += 1

    @property
    def count(self) -> int:
        return self._count


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every HTTP request and counts it for the stats endpoint.

    Websocket connections do not pass through here.
    """

    def __init__(self, app, counter: RequestCounter):
        super().__init__(app)
        self.counter = counter

    async def dispatch(self, request: Request, call_next) -> Response:
        self.counter.increment()
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)
