from typing import Literal

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(description="API version")
    status: Literal["ok", "degraded"] = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    database: Literal["connected", "unavailable"] = Field(description="Database status")
