"""
PyTest configuration and fixtures
"""
import os
import sys
import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

# Disable logging during tests
logging.getLogger().setLevel(logging.WARNING)

# Set test environment variables, clearing anything that would leak into Settings
for name in ("APP_NAME", "APP_VERSION", "GO_ENV", "ENVIRONMENT", "HOST", "PORT",
             "CORS_ORIGIN", "LOG_LEVEL", "LOG_DIR", "OTEL_EXPORTER_OTLP_ENDPOINT"):
    os.environ.pop(name, None)
os.environ["APP_ENV"] = "test"

from app.config import Settings
from app.main import create_app


@pytest.fixture
def make_settings():
    """Factory for settings isolated from the developer's .env file"""
    def _make_settings(**overrides) -> Settings:
        values = {"APP_ENV": "test"}
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make_settings


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """
    Test client fixture for FastAPI app
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_client(make_settings):
    """Factory for clients of apps built with custom settings"""
    clients = []

    def _make_client(**overrides) -> TestClient:
        test_client = TestClient(create_app(make_settings(**overrides)))
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make_client
    for test_client in clients:
        test_client.__exit__(None, None, None)
