"""
Shared fixtures: in-memory fakes for Redis, the text generator and the database.
"""

import fnmatch
import json
from typing import Any

import httpx
import pytest
import redis
from fastapi.testclient import TestClient

from analytics_chat.api.app import app
from analytics_chat.api.dependencies import (
    get_analytics_handler,
    get_cache_handler,
    get_chat_handler,
)
from analytics_chat.entities import GeneratedText
from analytics_chat.errors import BackendError, GenerationError
from analytics_chat.handlers import AnalyticsHandler, CacheHandler, ChatHandler
from analytics_chat.repositories import GeminiTextGenerator, RedisCacheRepository, SupabaseRepository
from analytics_chat.services import (
    AnalyticsService,
    CacheService,
    ChatService,
    QueryExecutor,
    SQLGenerator,
)


class FakeRedis:
    """The subset of redis.Redis the cache repository uses."""

    def __init__(self, scan_supported: bool = True) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.scan_calls = 0
        self._scan_supported = scan_supported

    def get(self, key: str) -> str | None:
        return self.store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> bool:
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                self.ttls.pop(key, None)
                removed += 1
        return removed

    def scan(self, cursor: int = 0, match: str | None = None, count: int | None = None):
        if not self._scan_supported:
            raise redis.ResponseError("ERR unknown command 'SCAN'")
        self.scan_calls += 1
        keys = sorted(k for k in self.store if match is None or fnmatch.fnmatch(k, match))
        page_size = count or 10
        page = keys[cursor : cursor + page_size]
        next_cursor = cursor + page_size
        return (next_cursor if next_cursor < len(keys) else 0), page

    def ping(self) -> bool:
        return True


class BrokenCacheStore:
    """A cache store whose every operation fails like a dropped connection."""

    def get_raw(self, key: str) -> str | None:
        raise redis.ConnectionError("Connection refused")

    def set_raw(self, key: str, value: str, ttl: int) -> None:
        raise redis.ConnectionError("Connection refused")

    def delete(self, key: str) -> bool:
        raise redis.ConnectionError("Connection refused")

    def delete_by_prefix(self, prefix: str) -> int:
        raise redis.ConnectionError("Connection refused")

    def health_check(self) -> bool:
        return False


class FakeTextGenerator:
    """Returns scripted texts in order and records every prompt."""

    def __init__(self, responses: list[str] | None = None, error: Exception | None = None) -> None:
        self.responses = list(responses or [])
        self.error = error
        self.prompts: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> GeneratedText:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        text = self.responses.pop(0) if self.responses else ""
        return GeneratedText(text=text, prompt_tokens=10, candidates_tokens=5, total_tokens=15)

    async def list_models(self) -> list[dict]:
        if self.error is not None:
            raise GenerationError(str(self.error))
        return [
            {
                "name": "models/gemini-pro",
                "displayName": "Gemini Pro",
                "description": "Text model",
                "supportedGenerationMethods": ["generateContent"],
            }
        ]


class FakeSqlBackend:
    """Returns a fixed procedure payload and records every call."""

    def __init__(
        self,
        payload: Any = None,
        error: str | None = None,
        sample: list[dict[str, Any]] | None = None,
    ) -> None:
        self.payload = payload if payload is not None else []
        self.error = error
        self.sample = sample or []
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.sample_calls: list[tuple[str, int]] = []

    async def call_procedure(self, name: str, params: dict[str, Any]) -> Any:
        self.calls.append((name, params))
        if self.error is not None:
            raise BackendError(self.error)
        return self.payload

    async def select_rows(self, table: str, limit: int) -> list[dict[str, Any]]:
        self.sample_calls.append((table, limit))
        if self.error is not None:
            raise BackendError(self.error)
        return self.sample[:limit]

    async def health_check(self) -> bool:
        return self.error is None


def gemini_over(handler, api_key="test-key") -> GeminiTextGenerator:
    """A real Gemini client whose HTTP traffic goes to ``handler``."""
    generator = GeminiTextGenerator(
        api_key=api_key, model_name="gemini-pro", base_url="https://gemini.test/v1beta"
    )
    generator._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return generator


def supabase_over(handler) -> SupabaseRepository:
    """A real PostgREST client whose HTTP traffic goes to ``handler``."""
    repository = SupabaseRepository(base_url="https://db.test", service_key="service-key")
    repository._client = httpx.AsyncClient(
        base_url="https://db.test/rest/v1", transport=httpx.MockTransport(handler)
    )
    return repository


def model_json(sql: str, explanation: str = "Counts orders.", visualization: str | None = "metric") -> str:
    """A model answer in the JSON shape the prompt asks for."""
    body: dict[str, Any] = {"sql": sql, "explanation": explanation}
    if visualization is not None:
        body["visualizationType"] = visualization
    return json.dumps(body)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache_service(fake_redis: FakeRedis) -> CacheService:
    return CacheService.create(repository=RedisCacheRepository(redis_client=fake_redis), ttl=3600)


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def backend() -> FakeSqlBackend:
    return FakeSqlBackend(payload=[{"total": 99441}])


def build_services(
    cache: CacheService,
    text_generator: FakeTextGenerator,
    backend: FakeSqlBackend,
) -> tuple[AnalyticsService, ChatService]:
    executor = QueryExecutor(backend=backend, procedure_name="execute_sql")
    analytics = AnalyticsService(
        cache=cache,
        generator=SQLGenerator(text_generator=text_generator, history_limit=10),
        executor=executor,
    )
    chat = ChatService(
        cache=cache,
        text_generator=text_generator,
        executor=executor,
        analytics=analytics,
        sample_table="order_summary",
        sample_limit=10,
        history_limit=10,
    )
    return analytics, chat


def install_handlers(
    cache: CacheService,
    text_generator: FakeTextGenerator,
    backend: FakeSqlBackend,
) -> None:
    """Point the app's handler dependencies at services built on fakes."""
    analytics, chat = build_services(cache, text_generator, backend)
    analytics_handler = AnalyticsHandler(analytics_service=analytics)
    chat_handler = ChatHandler(chat_service=chat, text_generator=text_generator)
    cache_handler = CacheHandler(cache_service=cache, backend=backend)

    app.dependency_overrides[get_analytics_handler] = lambda: analytics_handler
    app.dependency_overrides[get_chat_handler] = lambda: chat_handler
    app.dependency_overrides[get_cache_handler] = lambda: cache_handler


@pytest.fixture
def client(cache_service, text_generator, backend):
    """Create a test client wired to in-memory fakes (no lifespan, no network)."""
    install_handlers(cache_service, text_generator, backend)
    yield TestClient(app)
    app.dependency_overrides.clear()
