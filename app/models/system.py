"""
System-related data models
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AppInfo(BaseModel):
    """Application metadata fixed at startup"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Application name")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Current environment")
    timestamp: str = Field(..., description="Application start time")


class Endpoint(BaseModel):
    path: str
    method: str
    description: str


class Documentation(BaseModel):
    openapi_json: str = Field(..., description="OpenAPI document, JSON")
    openapi_yaml: str = Field(..., description="OpenAPI document, YAML")


class Links(BaseModel):
    repository: str
    issues: str


class WelcomeData(BaseModel):
    """Payload for the index endpoint"""
    message: str
    description: str
    documentation: Documentation
    links: Links
    endpoints: List[Endpoint]


class MemoryInfo(BaseModel):
    """Memory statistics in bytes, percent of total for percent"""
    rss: int = Field(0, description="Resident set size of the process")
    vms: int = Field(0, description="Virtual memory size of the process")
    percent: float = Field(0, description="Process RSS as a percentage of total memory")
    available: int = Field(0, description="Memory available on the host")
    total: int = Field(0, description="Total memory on the host")
    used: Optional[int] = Field(None, description="Memory used on the host")


class HealthData(BaseModel):
    """Payload for the health check endpoint"""
    status: str = Field("healthy", description="Health status")
    uptime: float = Field(..., description="Seconds since the application started")
    timestamp: str = Field(..., description="Health snapshot time")
    memory: MemoryInfo
    version: str
    environment: str


class CPUInfo(BaseModel):
    count: int = 0
    percent: float = 0.0


class SystemInfo(BaseModel):
    platform: str
    platform_release: str
    platform_version: str
    architecture: str
    processor: str
    python_version: str
    uptime: float
    memory: MemoryInfo
    cpu: CPUInfo


class EnvironmentInfo(BaseModel):
    app_env: str
    port: str
    host: str


class InfoData(BaseModel):
    """Payload for the system information endpoint"""
    application: AppInfo
    system: SystemInfo
    environment: EnvironmentInfo


class VersionData(BaseModel):
    version: str
    name: str
    environment: str


class EchoData(BaseModel):
    """Payload for the echo endpoint"""
    echo: Any = Field(..., description="Decoded request body")
    headers: Dict[str, str] = Field(default_factory=dict, description="First value of each request header")
    method: str
