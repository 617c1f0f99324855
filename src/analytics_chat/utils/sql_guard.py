"""Regex-based SQL safety checks.

This is a blocklist, not a parser. It is a first line of defense in front of
the ``execute_sql`` stored procedure, which performs its own independent check
(see ``db/rpc_function.sql``). Comments are removed only for pattern matching;
the stripped text is never what gets executed.
"""

import re
from dataclasses import dataclass

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT = re.compile(r"--.*$", re.MULTILINE)

# (pattern, rule name) pairs applied to the comment-stripped, lower-cased text
_DANGEROUS_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r";\s*(drop|delete|update|insert|alter|create|truncate|grant|revoke)"),
        "chained write or DDL statement",
    ),
    (re.compile(r"union.*select", re.DOTALL), "UNION SELECT"),
    (re.compile(r"exec\("), "EXEC call"),
    (re.compile(r"execute\("), "EXECUTE call"),
)

# Server-side rule set of the execute_sql procedure: any occurrence is rejected
_PROCEDURE_FORBIDDEN = re.compile(
    r"(drop|delete|update|insert|alter|create|truncate|grant|revoke|exec|execute)"
)

_ALLOWED_PREFIXES = ("select", "with")


@dataclass(frozen=True)
class SQLCheck:
    """Outcome of a SQL safety check."""

    valid: bool
    error: str | None = None


def strip_comments(sql: str) -> str:
    """Remove block comments, then line comments."""
    without_blocks = _BLOCK_COMMENT.sub("", sql)
    return _LINE_COMMENT.sub("", without_blocks)


def validate_sql(sql: str) -> SQLCheck:
    """Check generated SQL before it is executed or cached.

    Args:
        sql: Raw SQL, already stripped of a trailing statement terminator

    Returns:
        SQLCheck naming the violated rule when invalid
    """
    normalized = strip_comments(sql.strip().lower())

    for pattern, rule in _DANGEROUS_PATTERNS:
        if pattern.search(normalized):
            return SQLCheck(
                valid=False,
                error=f"SQL contains potentially dangerous operations ({rule})",
            )

    if not normalized.strip().startswith(_ALLOWED_PREFIXES):
        return SQLCheck(valid=False, error="Only SELECT queries are allowed")

    return SQLCheck(valid=True)


def check_procedure_input(sql: str) -> SQLCheck:
    """Apply the execute_sql procedure's own rules on the client side.

    Stricter than ``validate_sql``: any forbidden keyword anywhere in the text
    is rejected, including inside identifiers.
    """
    cleaned = sql.strip()
    if cleaned.endswith(";"):
        cleaned = cleaned.rstrip(";").strip()

    normalized = strip_comments(cleaned.lower()).strip()

    if not normalized.startswith(_ALLOWED_PREFIXES):
        return SQLCheck(valid=False, error="Only SELECT queries are allowed")

    if _PROCEDURE_FORBIDDEN.search(normalized):
        return SQLCheck(
            valid=False,
            error="Potentially dangerous SQL operations are not allowed",
        )

    return SQLCheck(valid=True)
