"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the remote authority API,
the game-session directory) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from identity_cache.protocols import CacheStore, RemoteAuthority, SessionDirectory

from .mojang_authority_client import MojangAuthorityClient
from .redis_repository import RedisCacheRepository
from .session_directory import InMemorySessionDirectory

__all__ = [
    "CacheStore",
    "RemoteAuthority",
    "SessionDirectory",
    "RedisCacheRepository",
    "MojangAuthorityClient",
    "InMemorySessionDirectory",
]
