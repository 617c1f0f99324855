"""SQL generation results.

The generator returns one of two variants, so callers branch on the type
instead of probing an empty ``sql`` string.
"""

from dataclasses import dataclass
from typing import Literal

VisualizationType = Literal["table", "bar", "line", "pie", "map", "metric"]

VISUALIZATION_TYPES: tuple[str, ...] = ("table", "bar", "line", "pie", "map", "metric")


@dataclass(frozen=True)
class ConversationalReply:
    """A reply that needs no query.

    Attributes:
        explanation: Text shown to the user
        visualization_type: Always ``table`` for conversational replies
    """

    explanation: str
    visualization_type: VisualizationType = "table"


@dataclass(frozen=True)
class GeneratedQuery:
    """A validated, single-statement read-only query.

    Attributes:
        sql: SQL text without a trailing terminator
        explanation: What the query does
        visualization_type: Suggested chart for the result
    """

    sql: str
    explanation: str
    visualization_type: VisualizationType = "table"


SQLGenerationResult = ConversationalReply | GeneratedQuery
