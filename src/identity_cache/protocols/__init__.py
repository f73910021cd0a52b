"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> another shared store, etc.)
- Unit testing with in-memory fakes, no network required
- Clear separation of concerns

Usage:
    ```python
    from identity_cache.protocols import CacheStore, RemoteAuthority

    store: CacheStore = RedisCacheRepository.create()
    authority: RemoteAuthority = MojangAuthorityClient.create()
    ```
"""

from .cache_store import CacheStore
from .remote_authority import RemoteAuthority
from .session_directory import SessionDirectory

__all__ = [
    "CacheStore",
    "RemoteAuthority",
    "SessionDirectory",
]
