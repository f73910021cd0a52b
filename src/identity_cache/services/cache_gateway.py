"""Distributed cache gateway.

Maps CacheEntry objects onto the shared CacheStore: one bucket, two keys per
entry (lowercased name and canonical identifier string), identical JSON
payload under both keys.
"""

from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from datetime import datetime
from uuid import UUID

import structlog
from pydantic import ValidationError

from identity_cache.config import settings
from identity_cache.dto import CachedIdentityRecord
from identity_cache.entities import CacheEntry
from identity_cache.exceptions import CacheStoreError
from identity_cache.protocols import CacheStore

logger = structlog.get_logger(__name__)


class IdentityCacheGateway:
    """Thin synchronous client over the shared store.

    Store errors (CacheStoreError) propagate to the caller; only malformed
    records are absorbed here, as misses.
    """

    def __init__(
        self,
        store: CacheStore,
        bucket: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            store: Shared cache backend (required).
            bucket: Bucket holding all identity records. Defaults to settings.
            clock: Returns "now" for expiry checks. Defaults to UTC wall time.
        """
        self._store = store
        self._bucket = bucket or settings.identity_cache_bucket
        self._clock = clock

    @contextmanager
    def session(self) -> Iterator["IdentityCacheGateway | None"]:
        """Check out one store connection for the duration of the block.

        Yields:
            A gateway bound to the checked-out connection, or None when no
            connection could be acquired (the failure is logged)
        """
        with ExitStack() as stack:
            try:
                pinned = stack.enter_context(self._store.session())
            except CacheStoreError as e:
                logger.error("shared_cache_unavailable", bucket=self._bucket, error=str(e))
                pinned = None

            if pinned is None:
                yield None
            else:
                yield IdentityCacheGateway(pinned, bucket=self._bucket, clock=self._clock)

    def fetch_by_name(self, name: str) -> CacheEntry | None:
        """Read the record stored under a lowercased name."""
        return self._fetch(name.lower())

    def fetch_by_identifier(self, identifier: UUID) -> CacheEntry | None:
        """Read the record stored under an identifier."""
        return self._fetch(str(identifier))

    def _fetch(self, key: str) -> CacheEntry | None:
        stored = self._store.get(self._bucket, key)
        if stored is None:
            return None
        try:
            return CachedIdentityRecord.model_validate_json(stored).to_entry()
        except ValidationError as e:
            logger.warning(
                "malformed_cache_record",
                bucket=self._bucket,
                key=key,
                error_count=e.error_count(),
            )
            return None

    def store(self, entry: CacheEntry) -> None:
        """Write one entry under both of its keys, name first."""
        payload = CachedIdentityRecord.from_entry(entry).to_json()
        self._store.set(self._bucket, entry.name_key, payload)
        self._store.set(self._bucket, str(entry.identifier), payload)

    def evict_name(self, name: str) -> None:
        """Delete the record stored under a lowercased name."""
        self._store.delete(self._bucket, name.lower())

    def evict_identifier(self, identifier: UUID) -> None:
        """Delete the record stored under an identifier."""
        self._store.delete(self._bucket, str(identifier))

    def is_expired(self, entry: CacheEntry) -> bool:
        """Expiry check against the gateway clock."""
        return entry.expired(self._clock() if self._clock is not None else None)

    def health_check(self) -> bool:
        return self._store.health_check()

    @property
    def bucket(self) -> str:
        """Bucket holding all identity records."""
        return self._bucket
