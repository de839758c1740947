"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected", "timeout"] = Field(
        description="Result of a SELECT 1 bounded by DB_TIMEOUT_MS",
    )
