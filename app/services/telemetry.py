"""
OpenTelemetry tracing setup

Tracing is switched on by OTEL_EXPORTER_OTLP_ENDPOINT. The provider is
owned by the application and handed to the tracing middleware directly;
it is never installed as the global tracer provider.
"""
import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from app.config import Settings

logger = logging.getLogger(__name__)

TRACER_NAME = "learn-python.http"


class Telemetry:
    """Holds the tracer used by the middleware and the provider behind it"""

    def __init__(self, tracer: trace.Tracer, provider: Optional[TracerProvider] = None):
        self.tracer = tracer
        self.provider = provider

    @property
    def enabled(self) -> bool:
        return self.provider is not None

    def shutdown(self) -> None:
        """Flush pending spans and stop the exporter"""
        if self.provider is None:
            return
        try:
            self.provider.shutdown()
        except Exception as e:
            logger.error(f"Error shutting down tracer provider: {e}")


def init_telemetry(settings: Settings) -> Telemetry:
    """
    Build the tracer for the application

    Args:
        settings: Resolved application settings

    Returns:
        A Telemetry with a real tracer when an OTLP endpoint is configured,
        otherwise one backed by a no-op tracer
    """
    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT
    if not endpoint:
        logger.info("OpenTelemetry tracing disabled (OTEL_EXPORTER_OTLP_ENDPOINT not set)")
        return Telemetry(trace.NoOpTracer())

    resource = Resource.create({
        "service.name": settings.APP_NAME,
        "service.version": settings.APP_VERSION,
        "deployment.environment": settings.APP_ENV,
    })
    provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    )

    logger.info(f"OpenTelemetry tracing enabled, exporting to {endpoint}")
    return Telemetry(provider.get_tracer(TRACER_NAME), provider)
