"""Gemini-based text generator.

Calls the Google Generative Language REST API directly with an API key from
Google AI Studio.

Requirements:
    - API key: https://aistudio.google.com/app/apikey
    - ``GOOGLE_AI_API_KEY`` set in the environment
    - ``GEMINI_MODEL_NAME`` naming a model that supports ``generateContent``
      (check ``GET /models`` on this service)
"""

import logging

import httpx

from analytics_chat.config import settings
from analytics_chat.entities import GeneratedText
from analytics_chat.errors import GenerationError

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    """Gemini implementation of the TextGenerator protocol.

    This class satisfies the TextGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        generator = GeminiTextGenerator.create(model_name="gemini-pro")
        result = await generator.generate("Say hello")
        print(result.text)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the Gemini text generator.

        Args:
            api_key: Google AI Studio API key. Defaults to settings.
            model_name: Model identifier without the ``models/`` prefix.
            base_url: API base URL. Defaults to settings.gemini_base_url.
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key or settings.google_ai_api_key
        self._model_name = model_name or settings.gemini_model_name
        self._base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self._timeout = timeout or settings.llm_timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "GeminiTextGenerator":
        """Factory method to create GeminiTextGenerator with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: API URL. If None, uses settings.

        Returns:
            Configured GeminiTextGenerator
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise GenerationError(
                "GOOGLE_AI_API_KEY is not set. Model: " + self._model_name
            )
        return {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}

    async def generate(self, prompt: str) -> GeneratedText:
        """Generate text for a single prompt.

        Args:
            prompt: The full prompt text

        Returns:
            GeneratedText with the concatenated candidate parts and usage

        Raises:
            GenerationError: If the request fails or the response has no text
        """
        url = f"{self._base_url}/models/{self._model_name}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            response = await self.client.post(url, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Gemini returned %s for model %s: %s",
                e.response.status_code,
                self._model_name,
                e.response.text[:500],
            )
            raise GenerationError(
                f"Gemini API error: {_error_message(e.response)}. Model: {self._model_name}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Gemini unreachable at %s: %s", self._base_url, e)
            raise GenerationError(
                f"Gemini API error: {e}. Model: {self._model_name}"
            ) from e

        try:
            data = response.json()
            candidates = data.get("candidates") or []
            if not candidates:
                feedback = data.get("promptFeedback") or {}
                reason = feedback.get("blockReason", "no candidates returned")
                raise GenerationError(
                    f"Gemini API error: {reason}. Model: {self._model_name}"
                )

            parts = (candidates[0].get("content") or {}).get("parts") or []
            text = "".join(part.get("text", "") for part in parts)
            usage = data.get("usageMetadata") or {}
            return GeneratedText(
                text=text,
                prompt_tokens=usage.get("promptTokenCount", 0),
                candidates_tokens=usage.get("candidatesTokenCount", 0),
                total_tokens=usage.get("totalTokenCount", 0),
            )
        except (ValueError, AttributeError, TypeError, IndexError) as e:
            logger.error("Unreadable Gemini response for model %s: %s", self._model_name, response.text[:500])
            raise GenerationError(
                f"Gemini API error: unreadable response ({response.text[:200]}). Model: {self._model_name}"
            ) from e

    async def list_models(self) -> list[dict]:
        """List models available to the configured API key.

        Raises:
            GenerationError: If the request fails or the body is unreadable
        """
        url = f"{self._base_url}/models"
        try:
            response = await self.client.get(url, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GenerationError(
                f"Failed to list models: {_error_message(e.response)}"
            ) from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Failed to list models: {e}") from e

        try:
            models = response.json().get("models", [])
        except (ValueError, AttributeError) as e:
            raise GenerationError(
                f"Failed to list models: unreadable response ({response.text[:200]})"
            ) from e
        if not isinstance(models, list):
            raise GenerationError("Failed to list models: unexpected response shape")
        return models

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"HTTP {response.status_code}"
