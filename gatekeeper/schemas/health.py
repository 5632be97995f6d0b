"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = "ok"
    version: str = Field(description="Running gatekeeper version")
    environment: str = Field(description="APP_ENV (dev or prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Result of a SELECT 1 against DATABASE_URL",
    )
