"""In-process dual index of cache entries.

Two dictionaries (lowercased name -> entry, identifier -> entry) hold shared
references to the same CacheEntry objects. Reads are plain ``dict.get`` calls
and never block. Writes and conditional removals take one lock out of a small
set of stripes chosen by key hash, so writers for different names rarely
contend and there is no global lock.
"""

import threading
from collections.abc import Callable, Hashable
from datetime import datetime
from uuid import UUID

from identity_cache.entities import CacheEntry

DEFAULT_CONCURRENCY = 4


class LocalDualIndex:
    """Bidirectional name/identifier index with lazy expiry.

    Expired entries are only dropped when a lookup touches them; nothing
    sweeps the maps in the background.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        """Initialize an empty index.

        Args:
            clock: Returns "now" for expiry checks. Defaults to UTC wall time.
            concurrency: Number of lock stripes used by writers.
        """
        if concurrency <= 0:
            raise ValueError("concurrency must be positive")
        self._clock = clock
        self._by_name: dict[str, CacheEntry] = {}
        self._by_identifier: dict[UUID, CacheEntry] = {}
        self._stripes = [threading.Lock() for _ in range(concurrency)]

    def _stripe(self, key: Hashable) -> threading.Lock:
        return self._stripes[hash(key) % len(self._stripes)]

    def _now(self) -> datetime | None:
        return self._clock() if self._clock is not None else None

    def put(self, entry: CacheEntry) -> None:
        """Index an entry under both its name and its identifier."""
        with self._stripe(entry.name_key):
            self._by_name[entry.name_key] = entry
        with self._stripe(entry.identifier):
            self._by_identifier[entry.identifier] = entry

    def get_by_name(self, name: str) -> CacheEntry | None:
        """Return the live entry for a name, evicting it if expired.

        Only the name side is evicted; the identifier side expires on its own
        next lookup.
        """
        key = name.lower()
        entry = self._by_name.get(key)
        if entry is None:
            return None
        if entry.expired(self._now()):
            self._remove_if_same(self._by_name, key, entry)
            return None
        return entry

    def get_by_identifier(self, identifier: UUID) -> CacheEntry | None:
        """Return the live entry for an identifier, evicting it if expired."""
        entry = self._by_identifier.get(identifier)
        if entry is None:
            return None
        if entry.expired(self._now()):
            self._remove_if_same(self._by_identifier, identifier, entry)
            return None
        return entry

    def _remove_if_same(self, mapping: dict, key: Hashable, entry: CacheEntry) -> None:
        # A concurrent put may have replaced the stale entry with a fresh one.
        with self._stripe(key):
            if mapping.get(key) is entry:
                del mapping[key]

    def clear(self) -> None:
        """Drop every entry."""
        for stripe in self._stripes:
            stripe.acquire()
        try:
            self._by_name.clear()
            self._by_identifier.clear()
        finally:
            for stripe in reversed(self._stripes):
                stripe.release()

    @property
    def name_count(self) -> int:
        """Entries in the name map, expired ones included."""
        return len(self._by_name)

    @property
    def identifier_count(self) -> int:
        """Entries in the identifier map, expired ones included."""
        return len(self._by_identifier)
