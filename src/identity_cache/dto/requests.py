"""Request DTOs for API endpoints."""

from uuid import UUID

from pydantic import BaseModel, Field


class PersistIdentityRequest(BaseModel):
    """Request DTO for recording an authoritative name/identifier pair."""

    name: str = Field(..., description="Display name, case preserved", min_length=1, max_length=64)
    identifier: UUID = Field(..., description="Unique identifier (dashed or undashed)")
