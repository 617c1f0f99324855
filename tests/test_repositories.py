"""
Tests for the HTTP repositories against mocked transports.
"""

import asyncio
import json

import httpx
import pytest

from analytics_chat.errors import BackendError, GenerationError
from analytics_chat.protocols import SqlBackend, TextGenerator

from conftest import FakeSqlBackend, FakeTextGenerator, gemini_over, supabase_over


def test_gemini_generate():
    """Test the generateContent request and response mapping."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-goog-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "candidates": [{"content": {"parts": [{"text": "Hello"}, {"text": " there"}]}}],
                "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 2, "totalTokenCount": 6},
            },
        )

    result = asyncio.run(gemini_over(handler).generate("Say hello"))

    assert seen["url"] == "https://gemini.test/v1beta/models/gemini-pro:generateContent"
    assert seen["key"] == "test-key"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "Say hello"
    assert result.text == "Hello there"
    assert result.to_payload()["usage"] == {"promptTokens": 4, "candidatesTokens": 2, "totalTokens": 6}


def test_gemini_http_error_becomes_generation_error():
    """Test that API errors carry the provider message and model."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"message": "models/gemini-pro is not found"}})

    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(gemini_over(handler).generate("Say hello"))
    assert "is not found" in str(exc_info.value)
    assert "Model: gemini-pro" in str(exc_info.value)


def test_gemini_without_candidates():
    """Test a blocked prompt."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(GenerationError, match="SAFETY"):
        asyncio.run(gemini_over(handler).generate("Say hello"))


def test_gemini_requires_api_key():
    """Test that a missing key fails before any request."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    generator = gemini_over(handler, api_key=None)
    generator._api_key = None
    with pytest.raises(GenerationError, match="GOOGLE_AI_API_KEY"):
        asyncio.run(generator.generate("Say hello"))
    assert calls == []


def test_gemini_list_models():
    """Test model listing."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"models": [{"name": "models/gemini-pro"}]})

    models = asyncio.run(gemini_over(handler).list_models())
    assert models == [{"name": "models/gemini-pro"}]


def test_supabase_call_procedure():
    """Test the RPC request shape and authentication headers."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"total": 99441}])

    rows = asyncio.run(supabase_over(handler).call_procedure("execute_sql", {"query_text": "SELECT 1"}))

    assert seen["path"] == "/rest/v1/rpc/execute_sql"
    assert seen["body"] == {"query_text": "SELECT 1"}
    assert rows == [{"total": 99441}]


def test_supabase_error_message():
    """Test that PostgREST errors keep the database message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Query execution failed: syntax error", "code": "P0001"})

    with pytest.raises(BackendError, match="syntax error"):
        asyncio.run(supabase_over(handler).call_procedure("execute_sql", {"query_text": "SELECT"}))


def test_supabase_empty_body():
    """Test a procedure returning nothing."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    assert asyncio.run(supabase_over(handler).call_procedure("execute_sql", {"query_text": "SELECT 1"})) is None


def test_supabase_select_rows():
    """Test bounded sampling parameters."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"order_id": "a"}])

    rows = asyncio.run(supabase_over(handler).select_rows("order_summary", 10))

    assert seen["path"] == "/rest/v1/order_summary"
    assert seen["params"] == {"select": "*", "limit": "10"}
    assert rows == [{"order_id": "a"}]


def test_gemini_non_json_body_becomes_generation_error():
    """Test that a 200 answer that is not JSON is reported as a generation error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>busy</html>")

    with pytest.raises(GenerationError, match="unreadable response") as exc_info:
        asyncio.run(gemini_over(handler).generate("Say hello"))
    assert "<html>busy</html>" in str(exc_info.value)


def test_gemini_unexpected_shape_becomes_generation_error():
    """Test a JSON body that is not an object."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "an", "object"])

    with pytest.raises(GenerationError, match="unreadable response"):
        asyncio.run(gemini_over(handler).generate("Say hello"))


def test_gemini_list_models_non_json_body():
    """Test model listing against a body that is not JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>busy</html>")

    with pytest.raises(GenerationError, match="Failed to list models"):
        asyncio.run(gemini_over(handler).list_models())


def test_supabase_select_rows_non_json_body():
    """Test that an unreadable sample response is a backend error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(BackendError, match="Unreadable response from /order_summary"):
        asyncio.run(supabase_over(handler).select_rows("order_summary", 10))


def test_supabase_procedure_non_json_body():
    """Test that an unreadable procedure response is a backend error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(BackendError, match="Unreadable response"):
        asyncio.run(supabase_over(handler).call_procedure("execute_sql", {"query_text": "SELECT 1"}))


def test_clients_satisfy_protocols():
    """Test the structural fit of the HTTP clients and the fakes."""
    assert isinstance(gemini_over(unused_transport), TextGenerator)
    assert isinstance(FakeTextGenerator(), TextGenerator)
    assert isinstance(supabase_over(unused_transport), SqlBackend)
    assert isinstance(FakeSqlBackend(), SqlBackend)


def unused_transport(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500)
