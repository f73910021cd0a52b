"""Redis implementation of CacheStore.

Each bucket is one Redis hash; keys are hash fields. Connections come from a
BlockingConnectionPool, so exhaustion waits a bounded time and then fails.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import redis

from identity_cache.config import get_redis_pool
from identity_cache.exceptions import CacheStoreError


class RedisCacheRepository:
    """Redis hash implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    All redis-py errors are re-raised as CacheStoreError.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        connection_pool: redis.ConnectionPool | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, one is built on the pool.
            connection_pool: Pool to check connections out of. If None, uses the
                             client's pool or builds one from settings.
        """
        if connection_pool is None:
            connection_pool = (
                redis_client.connection_pool if redis_client is not None else get_redis_pool()
            )
        self._pool = connection_pool
        self._client = redis_client or redis.Redis(connection_pool=self._pool)

    @classmethod
    def create(cls, connection_pool: redis.ConnectionPool | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            connection_pool: Shared pool. If None, builds one from settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(connection_pool=connection_pool)

    def get(self, bucket: str, key: str) -> str | None:
        """Read one field of a bucket hash (HGET)."""
        try:
            value = self._client.hget(bucket, key)
            if isinstance(value, bytes):
                value = value.decode()
        except redis.RedisError as e:
            raise CacheStoreError(f"HGET {bucket} {key} failed: {e}") from e
        except UnicodeDecodeError as e:
            raise CacheStoreError(f"HGET {bucket} {key} returned undecodable data") from e
        return value  # type: ignore[return-value]

    def set(self, bucket: str, key: str, value: str) -> None:
        """Write one field of a bucket hash (HSET)."""
        try:
            self._client.hset(bucket, key, value)
        except redis.RedisError as e:
            raise CacheStoreError(f"HSET {bucket} {key} failed: {e}") from e

    def delete(self, bucket: str, key: str) -> None:
        """Remove one field of a bucket hash (HDEL)."""
        try:
            self._client.hdel(bucket, key)
        except redis.RedisError as e:
            raise CacheStoreError(f"HDEL {bucket} {key} failed: {e}") from e

    @contextmanager
    def session(self) -> Iterator["RedisCacheRepository"]:
        """Pin one pooled connection for the duration of the block.

        Yields:
            A repository whose commands all run on the pinned connection

        Raises:
            CacheStoreError: If no connection could be acquired in time
        """
        try:
            client = redis.Redis(connection_pool=self._pool, single_connection_client=True)
        except redis.RedisError as e:
            raise CacheStoreError(f"Unable to acquire a Redis connection: {e}") from e

        try:
            yield RedisCacheRepository(redis_client=client, connection_pool=self._pool)
        finally:
            client.close()

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        """Disconnect every connection in the pool."""
        self._pool.disconnect()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
