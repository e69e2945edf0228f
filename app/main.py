"""
learn-python API
A small FastAPI service used to demonstrate containerization and orchestration
"""
import os
import time
import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from typing import Optional

from fastapi import FastAPI

from app.api import docs, echo, system
from app.config import Settings, get_settings
from app.middleware.cors import CORSHeadersMiddleware
from app.middleware.errors import UnhandledErrorMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.metrics import MetricsMiddleware
from app.middleware.security import SecurityHeadersMiddleware
from app.middleware.tracing import TracingMiddleware
from app.models.responses import utc_timestamp
from app.models.system import AppInfo
from app.services.metrics import HTTPMetrics
from app.services.telemetry import init_telemetry

# Get a logger for this module
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger

    Console output always; a rotating file under LOG_DIR when it is set.
    """
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, f"{settings.APP_NAME}.log"),
            maxBytes=10485760,  # 10MB
            backupCount=10,
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=settings.LOG_LEVEL, handlers=handlers, force=True)


def build_app_info(settings: Settings) -> AppInfo:
    logger.info(f"Creating handlers with version={settings.APP_VERSION}, env={settings.APP_ENV}")
    return AppInfo(
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        timestamp=utc_timestamp(),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application with its routes and middleware chain

    Args:
        settings: Resolved settings; read from the environment when omitted

    Returns:
        The configured FastAPI app

    Raises:
        pydantic.ValidationError: if the environment holds invalid settings
    """
    settings = settings or get_settings()
    telemetry = init_telemetry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        telemetry.shutdown()

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="A simple Python microservice for learning and demonstration",
        version=settings.APP_VERSION,
        docs_url=None,  # No Swagger UI; its CDN assets break the CSP
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # Startup-time state, read-only for the lifetime of the app
    app.state.settings = settings
    app.state.app_info = build_app_info(settings)
    app.state.metrics = HTTPMetrics()
    app.state.telemetry = telemetry
    app.state.clock = time.monotonic
    app.state.started_at = time.monotonic()

    app.include_router(system.router)
    app.include_router(echo.router)
    app.include_router(docs.router)

    # Starlette runs the last added middleware first, so the chain is
    # added innermost to outermost:
    # logging -> security headers -> CORS -> metrics -> tracing -> errors -> route
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(TracingMiddleware, tracer=telemetry.tracer)
    app.add_middleware(MetricsMiddleware, metrics=app.state.metrics)
    app.add_middleware(CORSHeadersMiddleware, allow_origin=settings.CORS_ORIGIN)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware, enabled=not settings.is_test)

    return app
