"""
CORS middleware

Every OPTIONS request is treated as a preflight and answered here,
whether or not the browser sent an Origin header.
"""
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add Cross-Origin Resource Sharing headers

    OPTIONS requests short-circuit with an empty 200 response and never
    reach the inner middleware or the route handler.
    """
    def __init__(self, app: ASGIApp, allow_origin: str = "*"):
        super().__init__(app)
        self.cors_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        }
        logger.debug(f"CORS configured for origin: {allow_origin}")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        response.headers.update(self.cors_headers)
        return response
