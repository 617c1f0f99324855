"""Pure helpers: SQL safety checks and cache key derivation."""

from .cache_keys import (
    CHAT_KEY_PREFIX,
    QUERY_KEY_PREFIX,
    derive_chat_key,
    derive_query_key,
    normalize_question,
)
from .sql_guard import SQLCheck, check_procedure_input, strip_comments, validate_sql

__all__ = [
    "CHAT_KEY_PREFIX",
    "QUERY_KEY_PREFIX",
    "SQLCheck",
    "check_procedure_input",
    "derive_chat_key",
    "derive_query_key",
    "normalize_question",
    "strip_comments",
    "validate_sql",
]
