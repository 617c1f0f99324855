"""Cache service for best-effort read-through caching.

This service wraps a CacheStore with JSON (de)serialization and the
failure policy: a broken cache behaves like an empty one and never fails
a request.
"""

import json
import logging
from typing import Any

from analytics_chat.config import settings
from analytics_chat.entities import PrefixDeletion
from analytics_chat.errors import CacheError, ScanNotSupportedError
from analytics_chat.protocols import CacheStore

logger = logging.getLogger(__name__)


class CacheService:
    """Best-effort cache over a CacheStore.

    This service depends on the CacheStore PROTOCOL, not a concrete
    implementation, so Redis can be swapped for an in-memory fake in tests.

    Example:
        ```python
        from analytics_chat.repositories import RedisCacheRepository
        from analytics_chat.services import CacheService

        cache = CacheService.create(repository=RedisCacheRepository.create())
        cache.set("query:abc", {"sql": "SELECT 1"})
        cache.get("query:abc")  # {"sql": "SELECT 1"}
        ```
    """

    def __init__(self, repository: CacheStore, ttl: int | None = None) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            ttl: Default time-to-live in seconds. Defaults to settings.
        """
        self._repository = repository
        self._ttl = ttl or settings.cache_ttl

    @classmethod
    def create(cls, repository: CacheStore, ttl: int | None = None) -> "CacheService":
        """Factory method to create CacheService with sensible defaults."""
        return cls(repository=repository, ttl=ttl)

    def get(self, key: str) -> Any | None:
        """Fetch and decode a cached value.

        JSON text is decoded; text that is not JSON is returned as-is.

        Args:
            key: The cache key

        Returns:
            The cached value, or None on a miss or on any failure
        """
        try:
            raw = self._repository.get_raw(key)
        except Exception as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return None

        if raw is None:
            return None
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except ValueError:
            return raw

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Serialize ``value`` as JSON and store it with an expiry.

        Failures are logged and swallowed.
        """
        try:
            payload = json.dumps(value)
            self._repository.set_raw(key, payload, ttl or self._ttl)
        except Exception as e:
            logger.warning("Cache set failed for %s: %s", key, e)

    def delete(self, key: str) -> bool:
        """Delete one key. Failures are logged and swallowed.

        Returns:
            True if a key was removed
        """
        try:
            return self._repository.delete(key)
        except Exception as e:
            logger.warning("Cache delete failed for %s: %s", key, e)
            return False

    def delete_by_prefix(self, prefix: str) -> PrefixDeletion:
        """Delete all keys starting with ``prefix``.

        Returns:
            PrefixDeletion; ``scan_supported`` is False (and count 0) when the
            backend cannot scan keys

        Raises:
            CacheError: For any other failure
        """
        try:
            count = self._repository.delete_by_prefix(prefix)
        except ScanNotSupportedError as e:
            logger.warning("Pattern-based clearing not supported for %s*: %s", prefix, e)
            return PrefixDeletion(prefix=prefix, count=0, scan_supported=False)
        except CacheError:
            raise
        except Exception as e:
            logger.error("Error scanning pattern %s*: %s", prefix, e)
            raise CacheError(str(e)) from e

        return PrefixDeletion(prefix=prefix, count=count)

    def is_healthy(self) -> bool:
        """Check if the cache backend answers."""
        try:
            return self._repository.health_check()
        except Exception:
            return False
