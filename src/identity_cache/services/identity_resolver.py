"""Identity resolver: tiered name <-> identifier lookup.

Tiers are consulted in a fixed order and the first hit wins:

    session directory -> local index -> literal identifier ->
    distributed cache -> remote authority

Shared-cache hits populate the local index. A remote-authority hit is written
through to every tier. Failures of the shared cache or of the authority are
logged and absorbed here; callers only ever see a value or None.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from types import TracebackType
from uuid import UUID

import structlog

from identity_cache.config import settings
from identity_cache.entities import CacheEntry
from identity_cache.entities.cache_entry import utcnow
from identity_cache.exceptions import AuthorityError, CacheStoreError
from identity_cache.protocols import CacheStore, RemoteAuthority, SessionDirectory
from identity_cache.repositories import (
    InMemorySessionDirectory,
    MojangAuthorityClient,
    RedisCacheRepository,
)
from identity_cache.utils import parse_identifier

from .cache_gateway import IdentityCacheGateway
from .local_index import LocalDualIndex

logger = structlog.get_logger(__name__)


class IdentityResolver:
    """Core resolution service.

    This service depends on PROTOCOLS, not concrete implementations:
    - SessionDirectory: who is connected right now
    - CacheStore (through IdentityCacheGateway): the shared cache tier
    - RemoteAuthority: the slow, authoritative lookup service

    The local index belongs to the resolver; several resolvers in one process
    never share cached state.

    Example:
        ```python
        from identity_cache.services import IdentityResolver

        # Create with defaults (Redis + Mojang API)
        resolver = IdentityResolver.create()

        identifier = resolver.resolve_identifier("Notch")
        name = resolver.resolve_name(identifier)
        ```
    """

    def __init__(
        self,
        gateway: IdentityCacheGateway,
        authority: RemoteAuthority,
        sessions: SessionDirectory | None = None,
        index: LocalDualIndex | None = None,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
        owns_authority: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            gateway: Distributed cache gateway (required).
            authority: Remote authority client (required).
            sessions: Session directory. Defaults to an empty in-memory one.
            index: Local index. Defaults to a fresh one owned by this resolver.
            ttl: Lifetime of persisted entries. Defaults to settings.
            clock: Returns "now". Defaults to UTC wall time.
            owns_authority: Close the authority client in close().
        """
        self._clock = clock or utcnow
        self._gateway = gateway
        self._authority = authority
        self._sessions = sessions if sessions is not None else InMemorySessionDirectory()
        self._index = index if index is not None else LocalDualIndex(clock=self._clock)
        self._ttl = ttl or timedelta(seconds=settings.identity_cache_ttl)
        self._owns_authority = owns_authority

    @classmethod
    def create(
        cls,
        store: CacheStore | None = None,
        authority: RemoteAuthority | None = None,
        sessions: SessionDirectory | None = None,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "IdentityResolver":
        """Factory method to create IdentityResolver with sensible defaults.

        Args:
            store: Shared cache backend. If None, uses Redis from settings.
            authority: Remote authority. If None, uses the Mojang API client.
            sessions: Session directory. If None, uses an empty in-memory one.
            ttl: Entry lifetime. If None, uses settings.
            clock: Returns "now". If None, uses UTC wall time.

        Returns:
            Configured IdentityResolver
        """
        gateway = IdentityCacheGateway(
            store=store or RedisCacheRepository.create(),
            clock=clock,
        )
        return cls(
            gateway=gateway,
            authority=authority or MojangAuthorityClient.create(),
            sessions=sessions,
            ttl=ttl,
            clock=clock,
            owns_authority=authority is None,
        )

    def resolve_identifier(self, name: str, allow_remote: bool = True) -> UUID | None:
        """Resolve a name to its identifier.

        Args:
            name: Display name, any case, or an identifier in text form
            allow_remote: Whether the remote authority may be queried

        Returns:
            The identifier, or None if unknown
        """
        online = self._sessions.is_online_by_name(name)
        if online is not None:
            return online

        entry = self._index.get_by_name(name)
        if entry is not None:
            return entry.identifier

        # Identifier literals are a format transform, not a lookup: never cached.
        literal = parse_identifier(name)
        if literal is not None:
            return literal

        with self._gateway.session() as shared:
            entry = self._read_shared(shared, "name", name)
            if entry is not None:
                self._index.put(entry)
                return entry.identifier

            if not allow_remote:
                return None

            try:
                candidates = self._authority.lookup_identifiers_by_names([name])
            except AuthorityError as e:
                logger.error("authority_lookup_failed", name=name, error=str(e))
                return None

            for candidate, identifier in candidates.items():
                if candidate.lower() == name.lower():
                    self._persist(shared, candidate, identifier)
                    return identifier

        logger.debug("authority_name_unknown", name=name)
        return None

    def resolve_name(self, identifier: UUID, allow_remote: bool = True) -> str | None:
        """Resolve an identifier to its current name.

        Args:
            identifier: The identifier to resolve
            allow_remote: Whether the remote authority may be queried

        Returns:
            The case-preserved name, or None if unknown
        """
        online = self._sessions.is_online_by_identifier(identifier)
        if online is not None:
            return online

        entry = self._index.get_by_identifier(identifier)
        if entry is not None:
            return entry.name

        with self._gateway.session() as shared:
            entry = self._read_shared(shared, "identifier", identifier)
            if entry is not None:
                self._index.put(entry)
                return entry.name

            if not allow_remote:
                return None

            try:
                history = self._authority.lookup_name_history(identifier)
            except AuthorityError as e:
                logger.error("authority_lookup_failed", identifier=str(identifier), error=str(e))
                return None

            if not history:
                logger.debug("authority_identifier_unknown", identifier=str(identifier))
                return None

            self._persist(shared, history[0], identifier)
            return history[0]

    def persist(self, name: str, identifier: UUID) -> CacheEntry:
        """Record an authoritative pair in every tier.

        Args:
            name: Case-preserved display name
            identifier: Its identifier

        Returns:
            The freshly issued entry
        """
        with self._gateway.session() as shared:
            return self._persist(shared, name, identifier)

    def _persist(
        self,
        shared: IdentityCacheGateway | None,
        name: str,
        identifier: UUID,
    ) -> CacheEntry:
        entry = CacheEntry.issue(name, identifier, now=self._clock(), ttl=self._ttl)
        self._index.put(entry)

        if shared is not None:
            try:
                shared.store(entry)
            except CacheStoreError as e:
                # The local tier already holds the fresh value.
                logger.error(
                    "shared_cache_write_failed",
                    name=name,
                    identifier=str(identifier),
                    error=str(e),
                )

        logger.info("identity_persisted", name=name, identifier=str(identifier))
        return entry

    def _read_shared(
        self,
        shared: IdentityCacheGateway | None,
        kind: str,
        key: str | UUID,
    ) -> CacheEntry | None:
        """Read the shared tier, evicting expired records.

        Returns:
            A live entry, or None on miss, expiry or store failure
        """
        if shared is None:
            return None

        try:
            if kind == "name":
                entry = shared.fetch_by_name(str(key))
            else:
                entry = shared.fetch_by_identifier(key)  # type: ignore[arg-type]

            if entry is None:
                return None

            if shared.is_expired(entry):
                logger.debug("shared_cache_record_expired", kind=kind, key=str(key))
                if kind == "name":
                    shared.evict_name(str(key))
                else:
                    shared.evict_identifier(key)  # type: ignore[arg-type]
                return None

            return entry

        except CacheStoreError as e:
            logger.error("shared_cache_read_failed", kind=kind, key=str(key), error=str(e))
            return None

    def get_stats(self) -> dict:
        """Get resolver statistics.

        Returns:
            Dictionary with local index sizes, bucket and TTL
        """
        return {
            "names_cached": self._index.name_count,
            "identifiers_cached": self._index.identifier_count,
            "bucket": self._gateway.bucket,
            "ttl": int(self._ttl.total_seconds()),
        }

    def is_healthy(self) -> bool:
        """Check if the shared cache is reachable."""
        return self._gateway.health_check()

    def close(self) -> None:
        """Drop the local index and release owned clients."""
        self._index.clear()
        if self._owns_authority and isinstance(self._authority, MojangAuthorityClient):
            self._authority.close()

    def __enter__(self) -> "IdentityResolver":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def index(self) -> LocalDualIndex:
        """Get the local index (for testing)."""
        return self._index

    @property
    def gateway(self) -> IdentityCacheGateway:
        """Get the distributed cache gateway (for testing)."""
        return self._gateway
