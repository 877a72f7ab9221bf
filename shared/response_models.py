"""
Common API response models.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from .models import ProjectSnapshot


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class APIResponse(BaseModel):
    """Standard API response wrapper."""

    success: bool = Field(default=True, description="Whether the operation was successful")
    message: str = Field(default="Operation completed successfully", description="Response message")
    timestamp: str = Field(default_factory=_now_iso, description="Response timestamp")


class SnapshotResponse(APIResponse):
    """Response carrying the full project state after an operation."""

    data: ProjectSnapshot = Field(..., description="Project and its ordered slides")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Health check message")
    version: str | None = Field(None, description="Service version")
    projects: int | None = Field(None, description="Number of stored projects")
