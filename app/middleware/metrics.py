"""
Prometheus metrics middleware
"""
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.services.metrics import METRICS_PATH, HTTPMetrics


def route_template(request: Request) -> str:
    """Path template of the matched route, or the raw path when nothing matched"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to count requests and time them

    Scrapes of the metrics endpoint are passed through unrecorded.
    """
    def __init__(self, app: ASGIApp, metrics: HTTPMetrics):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == METRICS_PATH:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        self.metrics.observe(request.method, route_template(request), response.status_code, duration)
        return response
