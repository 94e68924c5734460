"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class RootStatus(BaseModel):
    """Liveness payload served at the site root."""

    status: Literal["ok"] = "ok"


class HealthResponse(BaseModel):
    """Response body for the API health endpoint (includes credential store reachability)."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the user/session store answered a trivial query",
    )
