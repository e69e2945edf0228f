"""
Security headers middleware
Adds CSP, X-Frame-Options and related headers to every response
"""
import logging
from typing import Callable, Dict, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

DEFAULT_SECURITY_HEADERS = {
    # Prevents browser MIME type sniffing
    "X-Content-Type-Options": "nosniff",

    # Prevent the app from being embedded in an iframe (clickjacking protection)
    "X-Frame-Options": "DENY",

    # Enables browser XSS filtering
    "X-XSS-Protection": "1; mode=block",

    # Referrer Policy controls how much information is sent with requests
    "Referrer-Policy": "strict-origin-when-cross-origin",

    "Content-Security-Policy": "default-src 'self'",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses
    """
    def __init__(self, app: ASGIApp, security_headers: Optional[Dict[str, str]] = None):
        super().__init__(app)
        self.security_headers = security_headers or DEFAULT_SECURITY_HEADERS.copy()
        logger.debug(f"Security headers middleware initialized with {len(self.security_headers)} headers")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to all responses"""
        response = await call_next(request)

        for header_name, header_value in self.security_headers.items():
            response.headers[header_name] = header_value

        return response
