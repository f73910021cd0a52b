from typing import Any
from uuid import UUID

from fastapi import FastAPI, HTTPException, status

from identity_cache.api.dependencies import HandlerDep, lifespan
from identity_cache.config import settings
from identity_cache.dto import (
    HealthCheckResponse,
    IdentityResponse,
    IdentityStatsResponse,
    PersistIdentityRequest,
)

app = FastAPI(
    title="Identity Cache API",
    description="Player name <-> identifier resolution backed by Redis and the Mojang API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Identity Cache API",
        "version": "0.1.0",
        "endpoints": {
            "by_name": "/identities/by-name/{name}",
            "by_id": "/identities/by-id/{identifier}",
            "persist": "/identities",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    result = handler.health_check()
    if not result.cache_healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Distributed cache unreachable",
        )
    return result


# Resolution blocks on Redis and HTTP round trips, so these are plain
# functions and run in FastAPI's threadpool.
@app.get("/identities/by-name/{name}", response_model=IdentityResponse)
def resolve_by_name(name: str, handler: HandlerDep, allow_remote: bool = True) -> IdentityResponse:
    """Resolve a name (or identifier literal) to its identifier."""
    return handler.resolve_by_name(name, allow_remote=allow_remote)


@app.get("/identities/by-id/{identifier}", response_model=IdentityResponse)
def resolve_by_identifier(
    identifier: UUID,
    handler: HandlerDep,
    allow_remote: bool = True,
) -> IdentityResponse:
    """Resolve an identifier to its current name."""
    return handler.resolve_by_identifier(identifier, allow_remote=allow_remote)


@app.put("/identities", response_model=IdentityResponse)
def persist_identity(request: PersistIdentityRequest, handler: HandlerDep) -> IdentityResponse:
    """Record an authoritative name/identifier pair in every cache tier."""
    return handler.persist(request)


@app.get("/stats", response_model=IdentityStatsResponse)
def get_stats(handler: HandlerDep) -> IdentityStatsResponse:
    """Get local cache statistics."""
    return handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "identity_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
