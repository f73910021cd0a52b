"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request

from identity_cache.config import settings
from identity_cache.handlers import IdentityHandler
from identity_cache.logging_config import configure_logging
from identity_cache.repositories import InMemorySessionDirectory, RedisCacheRepository
from identity_cache.services import IdentityResolver

logger = structlog.get_logger(__name__)


def get_resolver(request: Request) -> IdentityResolver:
    """Dependency injection for IdentityResolver from app.state.

    Raises:
        RuntimeError: If the resolver is not initialized
    """
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise RuntimeError("IdentityResolver not initialized. Check lifespan setup.")
    return resolver


def get_handler(request: Request) -> IdentityHandler:
    """Dependency injection for IdentityHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "identity_handler", None)
    if handler is None:
        raise RuntimeError("IdentityHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repository (shared cache) - one pool for the whole process
    2. Resolver (business logic) - stored in app.state.resolver
    3. Handler (HTTP endpoints) - stored in app.state.identity_handler

    Cleanup:
        Closes the resolver and the Redis pool, then removes them from app.state
    """
    configure_logging()

    repository = RedisCacheRepository.create()
    sessions = InMemorySessionDirectory()
    resolver = IdentityResolver.create(store=repository, sessions=sessions)

    app.state.repository = repository
    app.state.sessions = sessions
    app.state.resolver = resolver
    app.state.identity_handler = IdentityHandler(resolver=resolver)

    logger.info(
        "identity_resolver_started",
        redis_url=settings.redis_url,
        bucket=settings.identity_cache_bucket,
        ttl_seconds=settings.identity_cache_ttl,
    )

    yield

    resolver.close()
    repository.close()
    del app.state.identity_handler
    del app.state.resolver
    del app.state.sessions
    del app.state.repository
    logger.info("identity_resolver_stopped")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[IdentityHandler, Depends(get_handler)]
ResolverDep = Annotated[IdentityResolver, Depends(get_resolver)]
