"""HTTP handlers for cache administration and health.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from analytics_chat.dto import (
    ClearAllResponse,
    ClearCacheRequest,
    ClearKeyResponse,
    ErrorResponse,
    HealthCheckResponse,
)
from analytics_chat.errors import CacheError
from analytics_chat.protocols import SqlBackend
from analytics_chat.services import CacheService
from analytics_chat.utils import (
    CHAT_KEY_PREFIX,
    QUERY_KEY_PREFIX,
    derive_chat_key,
    derive_query_key,
)

from .errors import bad_request, error_response

logger = logging.getLogger(__name__)

MANUAL_CLEAR_HINT = "You may need to clear cache manually via the Redis CLI (SCAN/DEL)"
QUERY_MODES = ("query", "analytics")


class CacheHandler:
    """HTTP handlers for cache operations.

    Example:
        ```python
        handler = CacheHandler(cache_service=cache_service)

        @app.delete("/cache/clear", response_model=ClearAllResponse)
        async def clear_all():
            return await handler.clear_all()
        ```
    """

    def __init__(self, cache_service: CacheService, backend: SqlBackend | None = None) -> None:
        """Initialize the cache handler.

        Args:
            cache_service: The cache service (required).
            backend: Database backend, only used for health reporting.
        """
        self._cache = cache_service
        self._backend = backend

    async def clear_key(self, request: ClearCacheRequest) -> ClearKeyResponse | JSONResponse:
        """Handle POST /cache/clear requests (one derived key)."""
        if not request.question:
            return bad_request("Question is required")

        if request.mode in QUERY_MODES:
            key = derive_query_key(request.question)
            message = "Cache cleared for analytics query"
        else:
            key = derive_chat_key(request.question)
            message = "Cache cleared for chat response"

        self._cache.delete(key)
        return ClearKeyResponse(success=True, message=message, key=key)

    async def clear_all(self) -> ClearAllResponse | JSONResponse:
        """Handle DELETE /cache/clear requests (every query:* and chat:* key)."""
        try:
            results = [
                self._cache.delete_by_prefix(prefix)
                for prefix in (QUERY_KEY_PREFIX, CHAT_KEY_PREFIX)
            ]
        except CacheError as e:
            logger.error("Clear all cache error: %s", e)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to clear cache",
                    message=str(e),
                    hint=MANUAL_CLEAR_HINT,
                ),
            )

        deleted_count = sum(result.count for result in results)
        scan_supported = all(result.scan_supported for result in results)

        if deleted_count > 0:
            message = f"All cache cleared successfully ({deleted_count} entries)"
        else:
            message = "Cache cleared (or no cache entries found)"

        return ClearAllResponse(
            success=True,
            message=message,
            deleted_count=deleted_count,
            hint=None if scan_supported else MANUAL_CLEAR_HINT,
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        cache_healthy = self._cache.is_healthy()
        database_healthy = await self._backend.health_check() if self._backend else None

        healthy = cache_healthy and database_healthy is not False
        return HealthCheckResponse(
            status="healthy" if healthy else "unhealthy",
            cache_healthy=cache_healthy,
            database_healthy=database_healthy,
        )
