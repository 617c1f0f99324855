"""Analytics Chat - plain-English questions answered with read-only SQL.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, TextGenerator, SqlBackend)
    - repositories: Data access implementations (Redis, Gemini, Supabase)
    - services: Business logic (generation, execution, caching, orchestration)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)
    - utils: SQL safety checks and cache key derivation

Usage:
    ```python
    from analytics_chat.utils import derive_query_key, validate_sql

    validate_sql("SELECT 1").valid  # True
    derive_query_key("Total Orders")  # "query:..."
    ```

For HTTP API:
    ```python
    from analytics_chat.api.app import app
    ```
"""

from analytics_chat.config import get_redis_client, settings
from analytics_chat.dto import AnalyticsQueryRequest, ChatRequest
from analytics_chat.entities import (
    AnalyticsAnswer,
    ConversationalReply,
    ConversationTurn,
    GeneratedQuery,
    QueryResult,
)
from analytics_chat.errors import (
    CacheError,
    ExecutionError,
    GenerationError,
    InputError,
    SQLValidationError,
)
from analytics_chat.handlers import AnalyticsHandler, CacheHandler, ChatHandler
from analytics_chat.protocols import CacheStore, SqlBackend, TextGenerator
from analytics_chat.repositories import (
    GeminiTextGenerator,
    RedisCacheRepository,
    SupabaseRepository,
)
from analytics_chat.services import (
    AnalyticsService,
    CacheService,
    ChatService,
    QueryExecutor,
    SQLGenerator,
)
from analytics_chat.utils import derive_chat_key, derive_query_key, validate_sql

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "SqlBackend",
    "TextGenerator",
    # Services (business logic)
    "AnalyticsService",
    "CacheService",
    "ChatService",
    "QueryExecutor",
    "SQLGenerator",
    # Handlers (HTTP)
    "AnalyticsHandler",
    "CacheHandler",
    "ChatHandler",
    # Repositories (data access)
    "GeminiTextGenerator",
    "RedisCacheRepository",
    "SupabaseRepository",
    # Entities (domain models)
    "AnalyticsAnswer",
    "ConversationTurn",
    "ConversationalReply",
    "GeneratedQuery",
    "QueryResult",
    # DTOs (API contracts)
    "AnalyticsQueryRequest",
    "ChatRequest",
    # Errors
    "CacheError",
    "ExecutionError",
    "GenerationError",
    "InputError",
    "SQLValidationError",
    # Helpers
    "derive_chat_key",
    "derive_query_key",
    "validate_sql",
]
