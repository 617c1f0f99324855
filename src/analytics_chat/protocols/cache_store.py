"""Cache storage protocol.

Defines the interface for any key-value backend that can hold cached
answers as JSON text with an expiry.

Implementations can include:
- Redis (default)
- Upstash or any other Redis-compatible service
- An in-memory fake for tests
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Implementations are raw data access: they raise on transport errors and
    leave the best-effort policy to ``CacheService``.
    """

    def get_raw(self, key: str) -> str | None:
        """Fetch the stored value.

        Args:
            key: The cache key

        Returns:
            The stored text, or None if absent or expired
        """
        ...

    def set_raw(self, key: str, value: str, ttl: int) -> None:
        """Store a value with an expiry.

        Args:
            key: The cache key
            value: Serialized value
            ttl: Time-to-live in seconds
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a single key.

        Returns:
            True if a key was removed, False otherwise
        """
        ...

    def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix`` using cursor iteration.

        Returns:
            Number of keys deleted

        Raises:
            ScanNotSupportedError: If the backend cannot scan keys
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible."""
        ...
