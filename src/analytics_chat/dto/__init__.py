"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import AnalyticsQueryRequest, ChatRequest, ClearCacheRequest, HistoryItem
from .responses import (
    ChatResponse,
    ChatText,
    ClearAllResponse,
    ClearKeyResponse,
    ErrorResponse,
    HealthCheckResponse,
    ModelInfo,
    ModelsResponse,
    QueryResponse,
)

__all__ = [
    "AnalyticsQueryRequest",
    "ChatRequest",
    "ClearCacheRequest",
    "HistoryItem",
    "ChatResponse",
    "ChatText",
    "ClearAllResponse",
    "ClearKeyResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "ModelInfo",
    "ModelsResponse",
    "QueryResponse",
]
