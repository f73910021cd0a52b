"""Response DTOs for API endpoints."""

from uuid import UUID

from pydantic import BaseModel, Field


class IdentityResponse(BaseModel):
    """Response DTO for a resolved name/identifier pair."""

    name: str = Field(..., description="Display name")
    identifier: UUID = Field(..., description="Unique identifier")


class IdentityStatsResponse(BaseModel):
    """Response DTO for resolver statistics."""

    names_cached: int = Field(..., description="Entries in the local name index", ge=0)
    identifiers_cached: int = Field(
        ...,
        description="Entries in the local identifier index",
        ge=0,
    )
    bucket: str = Field(..., description="Distributed cache bucket name")
    ttl_seconds: int = Field(..., description="Time-to-live for new entries in seconds", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the distributed cache is reachable")
