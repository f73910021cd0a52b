"""Identity Cache - tiered player name <-> identifier resolution.

This package provides a layered architecture for identity resolution:

Layers:
    - protocols: Interface contracts (CacheStore, RemoteAuthority, SessionDirectory)
    - repositories: Redis store, Mojang API client, in-memory session directory
    - services: Resolver, local dual index, distributed cache gateway
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts, cached record format)
    - entities: Domain models (internal)

Usage:
    ```python
    from identity_cache.services import IdentityResolver

    resolver = IdentityResolver.create()
    identifier = resolver.resolve_identifier("Notch")
    ```

For HTTP API:
    ```python
    from identity_cache.api.app import app
    ```
"""

from identity_cache.config import get_redis_pool, settings
from identity_cache.dto import CachedIdentityRecord, PersistIdentityRequest
from identity_cache.entities import CacheEntry
from identity_cache.exceptions import AuthorityError, CacheStoreError, IdentityCacheError
from identity_cache.handlers import IdentityHandler
from identity_cache.protocols import CacheStore, RemoteAuthority, SessionDirectory
from identity_cache.repositories import (
    InMemorySessionDirectory,
    MojangAuthorityClient,
    RedisCacheRepository,
)
from identity_cache.services import IdentityCacheGateway, IdentityResolver, LocalDualIndex

__all__ = [
    # Configuration
    "settings",
    "get_redis_pool",
    # Errors
    "IdentityCacheError",
    "CacheStoreError",
    "AuthorityError",
    # Protocols (interfaces)
    "CacheStore",
    "RemoteAuthority",
    "SessionDirectory",
    # Services (business logic)
    "IdentityResolver",
    "IdentityCacheGateway",
    "LocalDualIndex",
    # Handlers (HTTP)
    "IdentityHandler",
    # Repositories (data access)
    "RedisCacheRepository",
    "MojangAuthorityClient",
    "InMemorySessionDirectory",
    # Entities (domain models)
    "CacheEntry",
    # DTOs (API contracts)
    "CachedIdentityRecord",
    "PersistIdentityRequest",
]
