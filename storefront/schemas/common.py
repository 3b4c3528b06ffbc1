"""
Common schemas used across the API.
"""
from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response schema for health check endpoint."""
    status: str = Field(..., description="Application health status")
    database: str = Field(..., description="Database connection status")
    timestamp: str = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")


class RootResponse(BaseModel):
    """Response schema for root endpoint."""
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="API version")
    docs: str = Field(..., description="Documentation URL")
    health: str = Field(..., description="Health check URL")
    status: str = Field(..., description="Application status")
    timestamp: str = Field(..., description="Response timestamp")


class ErrorResponse(BaseModel):
    """Body of every error response."""
    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")


class GuardResponse(BaseModel):
    """Answer of the route-guard probes used by the web client."""
    ok: bool = Field(True, description="The caller passed the guard")
