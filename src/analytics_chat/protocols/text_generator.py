"""Text generation protocol.

Defines the interface for any service that turns a prompt into text.

Implementations can include:
- Google Gemini via the Generative Language REST API (default)
- Any OpenAI-compatible chat completion endpoint
- A scripted fake for tests
"""

from typing import Protocol, runtime_checkable

from analytics_chat.entities import GeneratedText


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for text-generation services."""

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def generate(self, prompt: str) -> GeneratedText:
        """Generate text for a single prompt.

        Args:
            prompt: The full prompt text

        Returns:
            The generated text and token usage

        Raises:
            GenerationError: If the service is unreachable or fails
        """
        ...

    async def list_models(self) -> list[dict]:
        """List models the service exposes (raw provider records)."""
        ...
