"""Cache entry domain entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

DEFAULT_TTL = timedelta(days=3)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    """One resolved name/identifier pair with an absolute expiry.

    The expiry is fixed when the entry is issued and is never extended by
    reads; a stale entry must be revalidated against a slower tier.

    Attributes:
        name: Display name, case preserved as received from the authority
        identifier: Stable unique identifier
        expires_at: Absolute instant after which the entry is stale
    """

    name: str
    identifier: UUID
    expires_at: datetime

    @classmethod
    def issue(
        cls,
        name: str,
        identifier: UUID,
        now: datetime | None = None,
        ttl: timedelta = DEFAULT_TTL,
    ) -> "CacheEntry":
        """Create an entry expiring ``ttl`` after ``now``."""
        issued_at = now or utcnow()
        return cls(name=name, identifier=identifier, expires_at=issued_at + ttl)

    def expired(self, now: datetime | None = None) -> bool:
        """True iff ``now`` is strictly after the expiry instant."""
        return (now or utcnow()) > self.expires_at

    @property
    def name_key(self) -> str:
        """Lowercased name used as the lookup key."""
        return self.name.lower()
