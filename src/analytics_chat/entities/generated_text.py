"""Text generation output entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GeneratedText:
    """Text returned by the text-generation service, with token usage."""

    text: str
    prompt_tokens: int = 0
    candidates_tokens: int = 0
    total_tokens: int = 0

    def to_payload(self) -> dict[str, Any]:
        """Shape stored in the cache and returned by the chat endpoint."""
        return {
            "text": self.text,
            "usage": {
                "promptTokens": self.prompt_tokens,
                "candidatesTokens": self.candidates_tokens,
                "totalTokens": self.total_tokens,
            },
        }
