"""Repository layer for data access.

This layer abstracts external dependencies (Redis, Supabase, Gemini)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from analytics_chat.protocols import CacheStore, SqlBackend, TextGenerator

from .gemini_text_generator import GeminiTextGenerator
from .redis_repository import RedisCacheRepository
from .supabase_repository import SupabaseRepository

__all__ = [
    "CacheStore",
    "SqlBackend",
    "TextGenerator",
    "GeminiTextGenerator",
    "RedisCacheRepository",
    "SupabaseRepository",
]
