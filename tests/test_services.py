"""
Service tests
"""
import psutil
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from prometheus_client.parser import text_string_to_metric_families

from app.middleware.tracing import TracingMiddleware
from app.services import system_stats
from app.services.metrics import HTTPMetrics
from app.services.telemetry import init_telemetry


def test_process_memory_reports_current_process():
    memory = system_stats.process_memory()
    assert memory is not None
    assert memory.rss > 0
    assert memory.vms >= memory.rss


def test_host_memory_reports_totals():
    memory = system_stats.host_memory()
    assert memory is not None
    assert memory.total > 0
    assert 0 <= memory.available <= memory.total


def test_collectors_return_none_on_failure(monkeypatch):
    def denied(*args, **kwargs):
        raise psutil.AccessDenied()

    monkeypatch.setattr(psutil, "Process", denied)
    monkeypatch.setattr(psutil, "virtual_memory", denied)
    monkeypatch.setattr(psutil, "cpu_count", denied)
    monkeypatch.setattr(psutil, "cpu_percent", denied)

    assert system_stats.process_memory() is None
    assert system_stats.host_memory() is None
    assert system_stats.cpu_count() is None
    assert system_stats.cpu_percent(interval=0) is None


def test_cpu_percent_samples_interval():
    percent = system_stats.cpu_percent(interval=0.01)
    assert percent is not None
    assert 0.0 <= percent <= 100.0


@pytest.mark.parametrize("rss,total,expected", [
    (50, 200, 25.0),
    (1, 3, 33.33),
    (1024, 0, 0.0),
    (1024, None, 0.0),
    (None, 1024, 0.0),
])
def test_memory_percent(rss, total, expected):
    assert system_stats.memory_percent(rss, total) == expected


def test_metrics_registries_are_independent():
    first = HTTPMetrics()
    second = HTTPMetrics()

    first.observe("GET", "/ping", 200, 0.01)

    labels = {"method": "GET", "endpoint": "/ping", "status": "200"}
    assert first.registry.get_sample_value("http_requests_total", labels) == 1.0
    assert second.registry.get_sample_value("http_requests_total", labels) is None


def test_metrics_render_exposition():
    metrics = HTTPMetrics()
    metrics.observe("POST", "/echo", 400, 0.2)
    families = {f.name: f for f in text_string_to_metric_families(metrics.render().decode())}

    requests = [s for s in families["http_requests"].samples if s.name == "http_requests_total"]
    assert [(s.labels, s.value) for s in requests] == [
        ({"method": "POST", "endpoint": "/echo", "status": "400"}, 1.0),
    ]
    buckets = [s for s in families["http_request_duration_seconds"].samples if s.name.endswith("_bucket")]
    assert buckets and all(s.labels["endpoint"] == "/echo" for s in buckets)


def test_metrics_endpoint_counts_requests(client, app):
    client.get("/ping")
    client.get("/ping")
    client.post("/echo", content=b"not json")
    client.get("/metrics")

    registry = app.state.metrics.registry
    assert registry.get_sample_value(
        "http_requests_total", {"method": "GET", "endpoint": "/ping", "status": "200"}
    ) == 2.0
    assert registry.get_sample_value(
        "http_requests_total", {"method": "POST", "endpoint": "/echo", "status": "400"}
    ) == 1.0
    assert registry.get_sample_value(
        "http_requests_total", {"method": "GET", "endpoint": "/metrics", "status": "200"}
    ) is None

    response = client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in response.text


def test_metrics_use_route_template_for_unmatched_paths(client, app):
    client.get("/nowhere")
    assert app.state.metrics.registry.get_sample_value(
        "http_requests_total", {"method": "GET", "endpoint": "/nowhere", "status": "404"}
    ) == 1.0


def test_telemetry_disabled_without_endpoint(settings):
    telemetry = init_telemetry(settings)
    assert not telemetry.enabled
    assert isinstance(telemetry.tracer, trace.NoOpTracer)
    telemetry.shutdown()


def test_telemetry_enabled_with_endpoint(make_settings):
    telemetry = init_telemetry(make_settings(OTEL_EXPORTER_OTLP_ENDPOINT="localhost:4317", APP_VERSION="1.2.3"))
    try:
        assert telemetry.enabled
        attributes = telemetry.provider.resource.attributes
        assert attributes["service.name"] == "learn-python"
        assert attributes["service.version"] == "1.2.3"
        assert attributes["deployment.environment"] == "test"
    finally:
        telemetry.shutdown()


def test_tracing_middleware_records_spans():
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))

    app = FastAPI()

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    app.add_middleware(TracingMiddleware, tracer=provider.get_tracer("test"))
    with TestClient(app) as client:
        assert client.get("/items/7").status_code == 200

    spans = exporter.get_finished_spans()
    assert len(spans) == 1
    assert spans[0].name == "GET /items/{item_id}"
    assert spans[0].attributes["http.route"] == "/items/{item_id}"
    assert spans[0].attributes["http.response.status_code"] == 200
