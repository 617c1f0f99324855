"""Request DTOs for API endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from analytics_chat.entities import ConversationTurn


class HistoryItem(BaseModel):
    """One earlier message of the conversation."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime | None = None

    def to_entity(self) -> ConversationTurn:
        return ConversationTurn(role=self.role, content=self.content, timestamp=self.timestamp)


class AnalyticsQueryRequest(BaseModel):
    """Request DTO for POST /analytics-query."""

    question: str = Field(..., description="The question in plain English")
    history: list[HistoryItem] | None = Field(
        None,
        description="Earlier messages, most recent last",
    )

    def history_entities(self) -> list[ConversationTurn]:
        return [item.to_entity() for item in self.history or []]


class ChatRequest(BaseModel):
    """Request DTO for POST /chat."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., description="The question in plain English")
    include_data: bool = Field(
        False,
        alias="includeData",
        description="Ground the answer with a small sample of rows",
    )
    history: list[HistoryItem] | None = Field(
        None,
        description="Earlier messages, most recent last",
    )

    def history_entities(self) -> list[ConversationTurn]:
        return [item.to_entity() for item in self.history or []]


class ClearCacheRequest(BaseModel):
    """Request DTO for POST /cache/clear."""

    question: str | None = Field(None, description="Question whose cached answer to drop")
    mode: str | None = Field(
        None,
        description="'query' (or 'analytics') for analytics answers, anything else for chat",
    )
