"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from analytics_chat.services import AnalyticsService, CacheService

    cache = CacheService.create(repository=RedisCacheRepository.create())
    ```
"""

from .analytics_service import AnalyticsService
from .cache_service import CacheService
from .chat_service import ChatAnswer, ChatService
from .query_executor import QueryExecutor
from .sql_generator import SQLGenerator

__all__ = [
    "AnalyticsService",
    "CacheService",
    "ChatAnswer",
    "ChatService",
    "QueryExecutor",
    "SQLGenerator",
]
