"""HTTP handlers for identity resolution.

Handlers convert between DTOs (API contracts) and resolver calls.
They handle HTTP concerns like status codes and error responses.
"""

from uuid import UUID

from fastapi import HTTPException, status

from identity_cache.dto import (
    HealthCheckResponse,
    IdentityResponse,
    IdentityStatsResponse,
    PersistIdentityRequest,
)
from identity_cache.services import IdentityResolver


class IdentityHandler:
    """HTTP handlers for identity operations.

    An unknown name or identifier is a 404, never a 500: the resolver has
    already absorbed cache and authority failures.

    Example:
        ```python
        resolver = IdentityResolver.create()
        handler = IdentityHandler(resolver=resolver)

        @app.get("/identities/by-name/{name}", response_model=IdentityResponse)
        async def by_name(name: str):
            return handler.resolve_by_name(name)
        ```
    """

    def __init__(self, resolver: IdentityResolver) -> None:
        """Initialize the identity handler.

        Args:
            resolver: The identity resolver (required).
        """
        self._resolver = resolver

    def resolve_by_name(self, name: str, allow_remote: bool = True) -> IdentityResponse:
        """Handle GET /identities/by-name/{name} requests.

        Raises:
            HTTPException: 404 if the name is unknown, 500 on unexpected errors
        """
        try:
            identifier = self._resolver.resolve_identifier(name, allow_remote=allow_remote)
            # Prefer the case-preserved name from the caches over the query text.
            canonical = None
            if identifier is not None:
                canonical = self._resolver.resolve_name(identifier, allow_remote=False)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to resolve name: {e}",
            ) from e

        if identifier is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown name: {name}",
            )

        return IdentityResponse(name=canonical or name, identifier=identifier)

    def resolve_by_identifier(
        self,
        identifier: UUID,
        allow_remote: bool = True,
    ) -> IdentityResponse:
        """Handle GET /identities/by-id/{identifier} requests.

        Raises:
            HTTPException: 404 if the identifier is unknown, 500 on unexpected errors
        """
        try:
            name = self._resolver.resolve_name(identifier, allow_remote=allow_remote)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to resolve identifier: {e}",
            ) from e

        if name is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown identifier: {identifier}",
            )

        return IdentityResponse(name=name, identifier=identifier)

    def persist(self, request: PersistIdentityRequest) -> IdentityResponse:
        """Handle PUT /identities requests.

        Raises:
            HTTPException: 500 if persistence fails unexpectedly
        """
        try:
            entry = self._resolver.persist(request.name, request.identifier)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to persist identity: {e}",
            ) from e

        return IdentityResponse(name=entry.name, identifier=entry.identifier)

    def get_stats(self) -> IdentityStatsResponse:
        """Handle GET /stats requests."""
        stats = self._resolver.get_stats()
        return IdentityStatsResponse(
            names_cached=stats["names_cached"],
            identifiers_cached=stats["identifiers_cached"],
            bucket=stats["bucket"],
            ttl_seconds=stats["ttl"],
        )

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = self._resolver.is_healthy()
        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )
