"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Clients and services built once in the lifespan and stored in app.state
    - Dependency functions retrieve from request.app.state
    - Tests swap handlers through app.dependency_overrides
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from analytics_chat.config import configure_logging, settings
from analytics_chat.handlers import AnalyticsHandler, CacheHandler, ChatHandler
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

logger = logging.getLogger(__name__)


def _from_state(request: Request, name: str):
    handler = getattr(request.app.state, name, None)
    if handler is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return handler


def get_analytics_handler(request: Request) -> AnalyticsHandler:
    """Dependency injection for AnalyticsHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "analytics_handler")


def get_chat_handler(request: Request) -> ChatHandler:
    """Dependency injection for ChatHandler from app.state."""
    return _from_state(request, "chat_handler")


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state."""
    return _from_state(request, "cache_handler")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (Redis, Supabase, Gemini) - created explicitly
    2. Services (business logic) - wired with explicit dependencies
    3. Handlers (HTTP endpoints) - stored in app.state

    Cleanup:
        Closes HTTP clients and removes everything from app.state on shutdown
    """
    configure_logging(settings.log_level)

    cache_repository = RedisCacheRepository.create()
    database = SupabaseRepository.create()
    text_generator = GeminiTextGenerator.create()

    cache_service = CacheService.create(repository=cache_repository)
    executor = QueryExecutor(backend=database)
    analytics_service = AnalyticsService(
        cache=cache_service,
        generator=SQLGenerator(text_generator=text_generator),
        executor=executor,
    )
    chat_service = ChatService(
        cache=cache_service,
        text_generator=text_generator,
        executor=executor,
        analytics=analytics_service,
    )

    app.state.analytics_handler = AnalyticsHandler(analytics_service=analytics_service)
    app.state.chat_handler = ChatHandler(chat_service=chat_service, text_generator=text_generator)
    app.state.cache_handler = CacheHandler(cache_service=cache_service, backend=database)

    logger.info("Text generation model: %s", text_generator.model_name)
    logger.info("Redis URL: %s", settings.redis_url)
    if cache_service.is_healthy():
        logger.info("Redis connection successful")
    else:
        logger.warning("Redis connection failed; requests will run uncached")

    yield

    await text_generator.close()
    await database.close()
    del app.state.analytics_handler
    del app.state.chat_handler
    del app.state.cache_handler
    logger.info("Analytics chat service shut down")


# Type aliases for cleaner dependency injection
AnalyticsHandlerDep = Annotated[AnalyticsHandler, Depends(get_analytics_handler)]
ChatHandlerDep = Annotated[ChatHandler, Depends(get_chat_handler)]
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
