"""Redis implementation of CacheStore.

Plain string keys holding JSON text, written with SETEX. It's the default
implementation and satisfies the CacheStore protocol.
"""

import logging

import redis

from analytics_chat.config import get_redis_client
from analytics_chat.errors import ScanNotSupportedError

logger = logging.getLogger(__name__)

SCAN_BATCH_SIZE = 100


class RedisCacheRepository:
    """Redis implementation of the key-value cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Errors from the client are not caught here; the service layer decides
    what a failure means.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository from settings."""
        return cls()

    def get_raw(self, key: str) -> str | None:
        """Fetch the stored text for ``key``."""
        value = self._client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value  # type: ignore[return-value]

    def set_raw(self, key: str, value: str, ttl: int) -> None:
        """Store ``value`` under ``key`` expiring after ``ttl`` seconds."""
        self._client.setex(key, ttl, value)

    def delete(self, key: str) -> bool:
        """Delete a specific entry by key.

        Returns:
            True if deleted, False otherwise
        """
        result: int = self._client.delete(key)  # type: ignore[assignment]
        return result > 0

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete all keys matching ``prefix*`` with cursor-based SCAN.

        Each SCAN page is deleted in one DEL call. Iteration stops when the
        cursor comes back to 0.

        Returns:
            Number of keys deleted

        Raises:
            ScanNotSupportedError: If the server rejects SCAN
        """
        pattern = f"{prefix}*"
        count = 0
        cursor = 0

        while True:
            try:
                cursor, keys = self._client.scan(
                    cursor=cursor, match=pattern, count=SCAN_BATCH_SIZE
                )
            except redis.ResponseError as e:
                message = str(e).lower()
                if "scan" in message or "unknown command" in message or "not supported" in message:
                    raise ScanNotSupportedError(f"SCAN not supported: {e}") from e
                raise

            if keys:
                deleted: int = self._client.delete(*keys)  # type: ignore[assignment]
                count += deleted

            cursor = int(cursor)
            if cursor == 0:
                break

        logger.info("Deleted %d keys matching %s", count, pattern)
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except redis.RedisError:
            return False
