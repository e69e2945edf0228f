"""
OpenAPI documents and the metrics scrape endpoint
"""
import yaml
from fastapi import APIRouter, Depends, Request, Response
from fastapi.openapi.utils import get_openapi

from app.api.deps import get_app_info, get_metrics
from app.models.system import AppInfo
from app.services.metrics import METRICS_PATH, HTTPMetrics

router = APIRouter(include_in_schema=False)


def build_openapi(request: Request, app_info: AppInfo) -> dict:
    """Generate the OpenAPI document once per app and reuse it"""
    app = request.app
    if not app.openapi_schema:
        app.openapi_schema = get_openapi(
            title=f"{app_info.name} API",
            version=app_info.version,
            description="A simple Python microservice for learning and demonstration",
            routes=app.routes,
        )
    return app.openapi_schema


@router.get("/openapi.json")
async def openapi_json(request: Request, app_info: AppInfo = Depends(get_app_info)):
    return build_openapi(request, app_info)


@router.get("/openapi.yaml")
async def openapi_yaml(request: Request, app_info: AppInfo = Depends(get_app_info)):
    document = yaml.safe_dump(build_openapi(request, app_info), sort_keys=False, allow_unicode=True)
    return Response(content=document, media_type="application/x-yaml")


@router.get(METRICS_PATH)
async def metrics(collector: HTTPMetrics = Depends(get_metrics)):
    """Prometheus scrape endpoint"""
    return Response(content=collector.render(), media_type=collector.content_type)
