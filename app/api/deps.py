"""
Dependencies that hand startup-time state to route handlers
"""
from fastapi import Request

from app.config import Settings
from app.models.system import AppInfo
from app.services.metrics import HTTPMetrics


def get_app_info(request: Request) -> AppInfo:
    return request.app.state.app_info


def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings


def get_metrics(request: Request) -> HTTPMetrics:
    return request.app.state.metrics


def get_uptime(request: Request) -> float:
    """Seconds elapsed since the application was constructed"""
    return request.app.state.clock() - request.app.state.started_at
