"""
Request logging middleware for FastAPI
"""
import time
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.models.responses import utc_timestamp

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log request details and timing

    Installed outermost so that it also sees responses produced by
    inner middleware, such as CORS preflight answers.
    """
    def __init__(self, app: ASGIApp, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled:
            return await call_next(request)

        timestamp = utc_timestamp()
        user_agent = request.headers.get("user-agent") or "Unknown"
        start_time = time.perf_counter()

        # Process the request
        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.6f}"

        logger.info(
            f"{timestamp} {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Process time: {process_time:.4f}s - "
            f"User-Agent: {user_agent}"
        )

        return response
