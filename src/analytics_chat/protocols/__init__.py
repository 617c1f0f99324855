"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> Upstash, Gemini -> OpenAI, etc.)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .sql_backend import SqlBackend
from .text_generator import TextGenerator

__all__ = [
    "CacheStore",
    "SqlBackend",
    "TextGenerator",
]
