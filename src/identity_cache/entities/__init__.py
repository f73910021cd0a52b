"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts or for the
distributed cache wire format - use DTOs from the dto package for that.
"""

from .cache_entry import DEFAULT_TTL, CacheEntry

__all__ = ["CacheEntry", "DEFAULT_TTL"]
