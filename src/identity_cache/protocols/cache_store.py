"""Distributed cache storage protocol.

Defines the hash-like key-value interface used as the shared cache tier.
Values are opaque serialized strings grouped into named buckets.

Implementations can include:
- Redis hashes (default)
- Any other shared key-value store
- In-memory dictionaries for tests
"""

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for distributed cache backends.

    Operations raise ``CacheStoreError`` on connectivity or protocol failures.

    Example:
        ```python
        from identity_cache.protocols import CacheStore

        store: CacheStore = RedisCacheRepository.create()
        with store.session() as pinned:
            pinned.set("uuid-cache", "notch", payload)
        ```
    """

    def get(self, bucket: str, key: str) -> str | None:
        """Read a value.

        Args:
            bucket: Logical bucket (hash) name
            key: Key inside the bucket

        Returns:
            The stored value, or None if absent
        """
        ...

    def set(self, bucket: str, key: str, value: str) -> None:
        """Write a value, replacing any previous one.

        Args:
            bucket: Logical bucket (hash) name
            key: Key inside the bucket
            value: Serialized payload
        """
        ...

    def delete(self, bucket: str, key: str) -> None:
        """Remove a key from a bucket. Missing keys are ignored.

        Args:
            bucket: Logical bucket (hash) name
            key: Key inside the bucket
        """
        ...

    def session(self) -> AbstractContextManager["CacheStore"]:
        """Check out one connection for a sequence of operations.

        The connection is released when the ``with`` block exits, whether it
        exits normally or with an exception.

        Returns:
            Context manager yielding a store bound to that connection
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
