"""Analytics answer entity."""

from dataclasses import dataclass, field
from typing import Any

from .generation import VISUALIZATION_TYPES, VisualizationType


@dataclass(frozen=True)
class AnalyticsAnswer:
    """The full answer to an analytics question.

    This is also the shape written to the cache, via ``to_payload``.

    Attributes:
        sql: Executed SQL, empty for conversational replies
        explanation: What the query does, or the conversational reply
        data: Row objects in database order
        columns: Column names in row key order
        visualization_type: Suggested chart
        cached: Whether the answer came from the cache
        execution_time: Milliseconds spent generating and executing
        is_conversational: True when no query was needed
    """

    sql: str
    explanation: str
    data: list[dict[str, Any]] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)
    visualization_type: VisualizationType = "table"
    cached: bool = False
    execution_time: int | None = None
    is_conversational: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Wire and cache representation (camelCase keys)."""
        payload: dict[str, Any] = {
            "sql": self.sql,
            "explanation": self.explanation,
            "data": self.data,
            "columns": self.columns,
            "visualizationType": self.visualization_type,
            "cached": self.cached,
        }
        if self.execution_time is not None:
            payload["executionTime"] = self.execution_time
        if self.is_conversational:
            payload["isConversational"] = True
        return payload

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalyticsAnswer":
        """Rebuild an answer from its cached representation.

        Raises:
            ValueError: If the payload does not have the expected shape
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")

        data = payload.get("data")
        columns = payload.get("columns")
        visualization_type = payload.get("visualizationType", "table")
        if not isinstance(data, list) or not isinstance(columns, list):
            raise ValueError("Cached answer is missing data or columns")
        if visualization_type not in VISUALIZATION_TYPES:
            raise ValueError(f"Unknown visualization type {visualization_type!r}")

        execution_time = payload.get("executionTime")
        return cls(
            sql=str(payload.get("sql", "")),
            explanation=str(payload.get("explanation", "")),
            data=data,
            columns=[str(column) for column in columns],
            visualization_type=visualization_type,
            cached=bool(payload.get("cached", False)),
            execution_time=int(execution_time) if execution_time is not None else None,
            is_conversational=bool(payload.get("isConversational", False)),
        )
