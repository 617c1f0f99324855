"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .analytics_handler import AnalyticsHandler
from .cache_handler import CacheHandler
from .chat_handler import ChatHandler

__all__ = [
    "AnalyticsHandler",
    "CacheHandler",
    "ChatHandler",
]
