"""Domain entities for internal representation.

These are frozen dataclasses used internally by services and repositories.
They are NOT used for API contracts - use DTOs from the dto package for that.
"""

from .analytics_answer import AnalyticsAnswer
from .conversation import ConversationTurn, format_turns, recent_turns
from .generated_text import GeneratedText
from .generation import (
    VISUALIZATION_TYPES,
    ConversationalReply,
    GeneratedQuery,
    SQLGenerationResult,
    VisualizationType,
)
from .prefix_deletion import PrefixDeletion
from .query_result import QueryResult

__all__ = [
    "AnalyticsAnswer",
    "ConversationTurn",
    "ConversationalReply",
    "GeneratedQuery",
    "GeneratedText",
    "PrefixDeletion",
    "QueryResult",
    "SQLGenerationResult",
    "VISUALIZATION_TYPES",
    "VisualizationType",
    "format_turns",
    "recent_turns",
]
