"""Deterministic cache key derivation."""

import base64
import hashlib

QUERY_KEY_PREFIX = "query:"
CHAT_KEY_PREFIX = "chat:"


def normalize_question(question: str) -> str:
    """Return the caching identity of a question."""
    return question.strip().lower()


def derive_query_key(question: str) -> str:
    """Key for an analytics answer: ``query:<sha256-hex>`` of the normalized question."""
    digest = hashlib.sha256(normalize_question(question).encode("utf-8")).hexdigest()
    return f"{QUERY_KEY_PREFIX}{digest}"


def derive_chat_key(prompt: str, context: str | None = None) -> str:
    """Key for a chat answer: ``chat:<base64(prompt[:context])>``.

    The prompt is neither normalized nor hashed, so keys grow with the prompt.
    Existing ``chat:*`` entries stay addressable this way.
    """
    base = f"{prompt}:{context}" if context else prompt
    encoded = base64.b64encode(base.encode("utf-8")).decode("ascii")
    return f"{CHAT_KEY_PREFIX}{encoded}"
