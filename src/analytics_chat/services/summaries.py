"""Plain-language summaries of structured query results."""

import re
from typing import Any

from analytics_chat.entities import AnalyticsAnswer

MAX_LISTED_ROWS = 5
SAMPLE_ROWS = 3

_FROM_TABLE = re.compile(r"from\s+([a-z_]+)", re.IGNORECASE)
_COUNT_PREFIX = re.compile(r"^(total|count of|number of|count)[\s_]*", re.IGNORECASE)


def format_value(value: Any) -> str:
    """Render numbers with thousands separators, everything else as text."""
    if isinstance(value, bool) or value is None:
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        if value.is_integer():
            return f"{int(value):,}"
        return f"{value:,.3f}".rstrip("0").rstrip(".")
    return str(value)


def table_label(sql: str) -> str | None:
    """Human name of the first table in ``sql`` (``olist_order_items`` -> ``order items``)."""
    match = _FROM_TABLE.search(sql or "")
    if match is None:
        return None
    return match.group(1).lower().removeprefix("olist_").replace("_", " ")


def short_sql_explanation(sql: str) -> str:
    """One sentence describing how the data was retrieved."""
    if not sql or not sql.strip():
        return ""

    lowered = sql.lower()
    table = table_label(sql) or "the dataset"

    if "count(" in lowered:
        return f"This data was retrieved by counting rows in the {table} table."
    if "sum(" in lowered:
        return f"This data was retrieved by summing values from the {table} table."
    if "avg(" in lowered or "average" in lowered:
        return f"This data was retrieved by calculating averages from the {table} table."
    if "max(" in lowered or "min(" in lowered:
        return f"This data was retrieved by finding the maximum/minimum values from the {table} table."
    return f"This data was retrieved from the {table} table."


def metric_sentence(column: str, value: Any, sql: str) -> str:
    """Sentence for a single-value result."""
    formatted = format_value(value)
    lowered = column.lower()

    if "count" in lowered or "total" in lowered or "number" in lowered:
        entity = _COUNT_PREFIX.sub("", lowered).replace("_", " ").strip()
        if not entity or entity in ("rows", "values"):
            entity = table_label(sql) or ""
        if entity and entity not in ("rows", "values"):
            return f"There are **{formatted}** {entity} in the dataset."
        return f"There are **{formatted}** items in the dataset."

    return f"The **{column}** is **{formatted}**."


def row_sentence(row: dict[str, Any]) -> str:
    """``**col**: value`` pairs for one row."""
    return ", ".join(f"**{column}**: {format_value(value)}" for column, value in row.items())


def summarize_answer(answer: AnalyticsAnswer) -> str:
    """Summarize a cached analytics answer for the chat view.

    One value gives a metric sentence, one row gives its key/value pairs,
    several rows give a count and up to five rows (three when there are more).
    """
    data = answer.data
    if not data:
        return answer.explanation or "No data found."

    sections: list[str] = []

    if len(data) == 1:
        row = data[0]
        if len(row) == 1:
            column, value = next(iter(row.items()))
            sections.append(metric_sentence(column, value, answer.sql))
        else:
            sections.append(f"Here is the result: {row_sentence(row)}.")
    else:
        sections.append(f"The query returned **{len(data):,}** rows.")
        shown = data if len(data) <= MAX_LISTED_ROWS else data[:SAMPLE_ROWS]
        lines = [f"- {row_sentence(row)}" for row in shown]
        if len(shown) < len(data):
            lines.append(f"- ...and {len(data) - len(shown):,} more rows")
        sections.append("\n".join(lines))

    explanation = short_sql_explanation(answer.sql)
    if explanation:
        sections.append(f"_{explanation}_")

    return "\n\n".join(sections)
