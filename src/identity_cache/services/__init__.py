"""Service layer for business logic.

This layer contains the core resolution logic and its two caches.
Services depend on protocols (interfaces), not concrete implementations,
making them testable against in-memory fakes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from identity_cache.services import IdentityResolver

    # Using factory method (recommended)
    resolver = IdentityResolver.create()

    # Or manual creation
    resolver = IdentityResolver(gateway=gateway, authority=authority)
    ```
"""

from .cache_gateway import IdentityCacheGateway
from .identity_resolver import IdentityResolver
from .local_index import LocalDualIndex

__all__ = [
    "IdentityCacheGateway",
    "IdentityResolver",
    "LocalDualIndex",
]
