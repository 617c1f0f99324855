"""Query execution result entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueryResult:
    """Rows returned by the database.

    Attributes:
        data: Row objects in database order, keys in column order
        columns: Column names taken from the first row
    """

    data: list[dict[str, Any]] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: list[dict[str, Any]]) -> "QueryResult":
        """Build a result, deriving columns from the first row's key order."""
        columns = list(rows[0].keys()) if rows else []
        return cls(data=rows, columns=columns)
