"""Core schemas for the application."""

from datetime import datetime

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str
    timestamp: datetime


class ErrorDetail(BaseModel):
    """Schema for a rejected request."""
    message: str
    field: str | None = None
