"""Serialized cache record stored in the distributed cache."""

from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from identity_cache.entities import CacheEntry


class CachedIdentityRecord(BaseModel):
    """Wire form of a CacheEntry.

    Stored as JSON with the fields ``name``, ``identifier`` (canonical dashed
    string) and ``expiresAt`` (ISO-8601 with microseconds and offset; a value
    without an offset is rejected). The same payload is written under both the
    lowercased name and the identifier key.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1)
    identifier: UUID
    expires_at: AwareDatetime = Field(..., alias="expiresAt")

    @classmethod
    def from_entry(cls, entry: CacheEntry) -> "CachedIdentityRecord":
        """Build the wire record for a domain entry."""
        return cls(name=entry.name, identifier=entry.identifier, expires_at=entry.expires_at)

    def to_entry(self) -> CacheEntry:
        """Convert back to the domain entry."""
        return CacheEntry(name=self.name, identifier=self.identifier, expires_at=self.expires_at)

    def to_json(self) -> str:
        """Serialize using the wire field names."""
        return self.model_dump_json(by_alias=True)
