"""
OpenTelemetry tracing middleware
"""
from typing import Callable

from fastapi import Request, Response
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.middleware.metrics import route_template


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to wrap each request in a server span
    """
    def __init__(self, app: ASGIApp, tracer: trace.Tracer):
        super().__init__(app)
        self.tracer = tracer

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        with self.tracer.start_as_current_span(
            f"{request.method} {request.url.path}",
            kind=SpanKind.SERVER,
        ) as span:
            span.set_attribute("http.request.method", request.method)
            span.set_attribute("url.path", request.url.path)

            response = await call_next(request)

            route = route_template(request)
            span.update_name(f"{request.method} {route}")
            span.set_attribute("http.route", route)
            span.set_attribute("http.response.status_code", response.status_code)
            if response.status_code >= 500:
                span.set_status(Status(StatusCode.ERROR))
            return response
