"""Supabase implementation of SqlBackend.

Talks to Supabase's PostgREST endpoint with the service role key:
- ``POST /rest/v1/rpc/<procedure>`` for stored procedures
- ``GET /rest/v1/<table>?select=*&limit=n`` for bounded samples
"""

import logging
from typing import Any

import httpx

from analytics_chat.config import settings
from analytics_chat.errors import BackendError

logger = logging.getLogger(__name__)


class SupabaseRepository:
    """PostgREST client satisfying the SqlBackend protocol."""

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            base_url: Supabase project URL. Defaults to settings.supabase_url.
            service_key: Service role key. Defaults to settings.
            timeout: Request timeout in seconds.
        """
        self._base_url = (base_url or settings.supabase_url).rstrip("/")
        self._service_key = service_key or settings.supabase_service_role_key
        self._timeout = timeout or settings.supabase_timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._service_key:
                headers["apikey"] = self._service_key
                headers["Authorization"] = f"Bearer {self._service_key}"
            self._client = httpx.AsyncClient(
                base_url=f"{self._base_url}/rest/v1",
                headers=headers,
                timeout=self._timeout,
            )
        return self._client

    @classmethod
    def create(cls) -> "SupabaseRepository":
        """Factory method to create SupabaseRepository from settings."""
        return cls()

    async def call_procedure(self, name: str, params: dict[str, Any]) -> Any:
        """Invoke ``name`` through ``/rpc`` and return the decoded body.

        Raises:
            BackendError: With the database's message on any failure
        """
        try:
            response = await self.client.post(f"/rpc/{name}", json=params)
        except httpx.HTTPError as e:
            logger.error("Supabase unreachable at %s: %s", self._base_url, e)
            raise BackendError(str(e)) from e

        if response.is_error:
            raise BackendError(_error_message(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"Unreadable response from /rpc/{name}: {response.text[:200]}") from e

    async def select_rows(self, table: str, limit: int) -> list[dict[str, Any]]:
        """Fetch up to ``limit`` rows from ``table``.

        Raises:
            BackendError: If the request fails or the body is not JSON
        """
        try:
            response = await self.client.get(
                f"/{table}", params={"select": "*", "limit": str(limit)}
            )
        except httpx.HTTPError as e:
            raise BackendError(str(e)) from e

        if response.is_error:
            raise BackendError(_error_message(response))

        try:
            rows = response.json()
        except ValueError as e:
            raise BackendError(f"Unreadable response from /{table}: {response.text[:200]}") from e
        return rows if isinstance(rows, list) else []

    async def health_check(self) -> bool:
        """Check if PostgREST answers."""
        try:
            response = await self.client.get("/")
            return response.status_code < 500
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _error_message(response: httpx.Response) -> str:
    """PostgREST errors look like ``{"message": ..., "code": ..., "hint": ...}``."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
