"""Error taxonomy.

Only ``InputError``, ``GenerationError``, ``SQLValidationError`` and
``ExecutionError`` ever reach a client. ``CacheError`` is logged and swallowed
by the cache service, except on the cache administration path.
"""


class AnalyticsChatError(Exception):
    """Base class for all service errors."""


class InputError(AnalyticsChatError):
    """Missing or malformed request input."""


class GenerationError(AnalyticsChatError):
    """Text-generation service unreachable, failing, or returning unparsable output."""


class SQLValidationError(AnalyticsChatError):
    """Generated SQL failed the safety checks."""

    def __init__(self, message: str, sql: str) -> None:
        super().__init__(message)
        self.sql = sql


class ExecutionError(AnalyticsChatError):
    """The database rejected or failed the query."""

    def __init__(self, message: str, sql: str, explanation: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql
        self.explanation = explanation


class BackendError(AnalyticsChatError):
    """The relational backend returned an error or could not be reached."""


class CacheError(AnalyticsChatError):
    """A cache operation failed."""


class ScanNotSupportedError(CacheError):
    """The cache backend does not support cursor-based key scanning."""
