import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start
        action = request.query_params.get("action")
        target = f"{request.url.path}?action={action}" if action else request.url.path

        log = logger.warning if response.status_code >= 500 else logger.info
        log("%s %s -> %s (%.2fs)", request.method, target, response.status_code, duration)

        return response
