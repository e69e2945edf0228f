"""
Prometheus request metrics

Each application owns one HTTPMetrics instance with its own registry,
so collectors never leak between apps built in the same process.
"""
from typing import Optional

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest


METRICS_PATH = "/metrics"


class HTTPMetrics:
    """Request counter and latency histogram bound to a private registry"""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )

    def observe(self, method: str, endpoint: str, status_code: int, duration: float) -> None:
        """Record one completed request"""
        status = str(status_code)
        self.requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        self.request_duration.labels(method=method, endpoint=endpoint, status=status).observe(duration)

    def render(self) -> bytes:
        """Text exposition of every collector in the registry"""
        return generate_latest(self.registry)
