"""
Response envelope models shared by every JSON endpoint
"""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current time as an RFC3339 UTC string"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class SuccessResponse(BaseModel):
    """Envelope for successful JSON responses"""
    success: bool = Field(True, description="Always true for this envelope")
    data: Any = Field(..., description="Endpoint specific payload")
    timestamp: str = Field(default_factory=utc_timestamp, description="Response construction time")


class ErrorResponse(BaseModel):
    """Envelope for client input errors"""
    model_config = ConfigDict(populate_by_name=True)

    error: bool = Field(True, description="Always true for this envelope")
    message: str = Field(..., description="Human readable error message")
    status_code: int = Field(..., alias="statusCode", description="HTTP status code")
    timestamp: str = Field(default_factory=utc_timestamp, description="Response construction time")
