"""Data Transfer Objects for external contracts.

These Pydantic models define the HTTP API contract and the serialized
record format stored in the distributed cache.

Internal domain logic should use entities from the entities package.
"""

from .records import CachedIdentityRecord
from .requests import PersistIdentityRequest
from .responses import HealthCheckResponse, IdentityResponse, IdentityStatsResponse

__all__ = [
    "CachedIdentityRecord",
    "PersistIdentityRequest",
    "IdentityResponse",
    "IdentityStatsResponse",
    "HealthCheckResponse",
]
