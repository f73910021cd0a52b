"""Exception hierarchy for identity resolution.

Repositories translate third-party errors (redis, httpx) into these types so
the resolver can absorb failures at each tier boundary without knowing which
client library sits underneath.
"""


class IdentityCacheError(Exception):
    """Base class for all identity cache errors."""


class CacheStoreError(IdentityCacheError):
    """The distributed cache store could not be reached or answered badly."""


class AuthorityError(IdentityCacheError):
    """The remote authority lookup failed (transport, status or payload)."""
