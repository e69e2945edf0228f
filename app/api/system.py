"""
System API endpoints
"""
import logging
import platform

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.api.deps import get_app_info, get_settings_state, get_uptime
from app.config import Settings
from app.models.responses import SuccessResponse, utc_timestamp
from app.models.system import (
    AppInfo,
    CPUInfo,
    Documentation,
    Endpoint,
    EnvironmentInfo,
    HealthData,
    InfoData,
    Links,
    MemoryInfo,
    SystemInfo,
    VersionData,
    WelcomeData,
)
from app.services import system_stats

# Create logger
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=["System"])

REPOSITORY_URL = "https://github.com/dxas90/learn-python"

ENDPOINTS = [
    Endpoint(path="/", method="GET", description="API welcome and documentation"),
    Endpoint(path="/ping", method="GET", description="Simple ping-pong response"),
    Endpoint(path="/healthz", method="GET", description="Health check endpoint"),
    Endpoint(path="/info", method="GET", description="Application and system information"),
    Endpoint(path="/version", method="GET", description="Application version information"),
    Endpoint(path="/echo", method="POST", description="Echo back the request body"),
    Endpoint(path="/openapi.json", method="GET", description="OpenAPI specification (JSON)"),
    Endpoint(path="/openapi.yaml", method="GET", description="OpenAPI specification (YAML)"),
    Endpoint(path="/metrics", method="GET", description="Prometheus metrics"),
]


def collect_memory(include_used: bool = False) -> MemoryInfo:
    """Snapshot process and host memory, zero-filling whatever is unavailable"""
    proc = system_stats.process_memory()
    host = system_stats.host_memory()
    if proc is None:
        logger.warning("Process memory unavailable, reporting zeros")
    if host is None:
        logger.warning("Host memory unavailable, reporting zeros")

    rss = proc.rss if proc else 0
    total = host.total if host else 0
    return MemoryInfo(
        rss=rss,
        vms=proc.vms if proc else 0,
        percent=system_stats.memory_percent(rss, total),
        available=host.available if host else 0,
        total=total,
        used=(host.used if host else 0) if include_used else None,
    )


# Define endpoints
@router.get("/", response_model=SuccessResponse)
async def index(app_info: AppInfo = Depends(get_app_info)):
    """Return a welcome message listing the available endpoints"""
    return SuccessResponse(
        data=WelcomeData(
            message=f"Welcome to {app_info.name} API",
            description="A simple Python microservice for learning and demonstration",
            documentation=Documentation(openapi_json="/openapi.json", openapi_yaml="/openapi.yaml"),
            links=Links(repository=REPOSITORY_URL, issues=f"{REPOSITORY_URL}/issues"),
            endpoints=ENDPOINTS,
        )
    )


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    """Liveness probe"""
    return PlainTextResponse("pong", media_type="text/plain")


@router.get("/healthz", response_model=SuccessResponse, response_model_exclude_none=True)
def healthz(
    app_info: AppInfo = Depends(get_app_info),
    uptime: float = Depends(get_uptime),
):
    """Readiness probe with uptime and memory usage"""
    return SuccessResponse(
        data=HealthData(
            status="healthy",
            uptime=uptime,
            timestamp=utc_timestamp(),
            memory=collect_memory(),
            version=app_info.version,
            environment=app_info.environment,
        )
    )


@router.get("/info", response_model=SuccessResponse)
def info(
    app_info: AppInfo = Depends(get_app_info),
    settings: Settings = Depends(get_settings_state),
    uptime: float = Depends(get_uptime),
):
    """
    Return application, host and runtime information

    Declared as a plain function so the CPU sampling window runs in the
    worker threadpool instead of the event loop.
    """
    cpu_percent = system_stats.cpu_percent()
    cpu_count = system_stats.cpu_count()

    return SuccessResponse(
        data=InfoData(
            application=app_info,
            system=SystemInfo(
                platform=platform.system().lower(),
                platform_release=platform.release(),
                platform_version=platform.version(),
                architecture=platform.machine(),
                processor=platform.processor(),
                python_version=platform.python_version(),
                uptime=uptime,
                memory=collect_memory(include_used=True),
                cpu=CPUInfo(
                    count=cpu_count or 0,
                    percent=cpu_percent if cpu_percent is not None else 0.0,
                ),
            ),
            environment=EnvironmentInfo(
                app_env=settings.APP_ENV,
                port=str(settings.PORT),
                host=settings.HOST,
            ),
        )
    )


@router.get("/version", response_model=SuccessResponse)
async def version(app_info: AppInfo = Depends(get_app_info)):
    """Return application version information"""
    return SuccessResponse(
        data=VersionData(
            version=app_info.version,
            name=app_info.name,
            environment=app_info.environment,
        )
    )
