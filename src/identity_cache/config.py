import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_max_connections: int = int(os.getenv("REDIS_MAX_CONNECTIONS", "50"))
    redis_pool_timeout: float = float(os.getenv("REDIS_POOL_TIMEOUT", "5.0"))
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5.0"))

    # Identity cache
    identity_cache_bucket: str = os.getenv("IDENTITY_CACHE_BUCKET", "uuid-cache")
    identity_cache_ttl: int = int(os.getenv("IDENTITY_CACHE_TTL", "259200"))  # 3 days

    # Remote authority
    authority_api_url: str = os.getenv("AUTHORITY_API_URL", "https://api.mojang.com")
    authority_timeout: float = float(os.getenv("AUTHORITY_TIMEOUT", "10.0"))
    authority_batch_size: int = int(os.getenv("AUTHORITY_BATCH_SIZE", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.identity_cache_ttl <= 0:
            raise ValueError("IDENTITY_CACHE_TTL must be a positive number of seconds")

        if self.redis_max_connections <= 0:
            raise ValueError("REDIS_MAX_CONNECTIONS must be positive")

        for name, value in (
            ("REDIS_POOL_TIMEOUT", self.redis_pool_timeout),
            ("REDIS_SOCKET_TIMEOUT", self.redis_socket_timeout),
            ("AUTHORITY_TIMEOUT", self.authority_timeout),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.authority_batch_size <= 0:
            raise ValueError(
                f"AUTHORITY_BATCH_SIZE must be positive, got {self.authority_batch_size}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_pool() -> redis.BlockingConnectionPool:
    """Create the process-wide Redis connection pool.

    A BlockingConnectionPool waits at most ``redis_pool_timeout`` seconds for a
    free connection before raising, instead of growing without bound.
    """
    return redis.BlockingConnectionPool.from_url(
        settings.redis_url,
        password=settings.redis_password,
        max_connections=settings.redis_max_connections,
        timeout=settings.redis_pool_timeout,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
        decode_responses=True,
    )
