"""Natural-language to SQL generation.

Greetings and general questions are answered locally. Everything else goes
to the text generator once (no retries); its JSON answer is parsed at this
boundary into a ConversationalReply or a validated GeneratedQuery.
"""

import json
import logging
import re
from typing import Any

from analytics_chat.config import settings
from analytics_chat.entities import (
    VISUALIZATION_TYPES,
    ConversationalReply,
    ConversationTurn,
    GeneratedQuery,
    SQLGenerationResult,
    format_turns,
    recent_turns,
)
from analytics_chat.errors import GenerationError, SQLValidationError
from analytics_chat.prompts import (
    DEFAULT_CONVERSATIONAL_REPLY,
    GENERAL_REPLY,
    GREETING_REPLY,
    build_sql_prompt,
)
from analytics_chat.protocols import TextGenerator
from analytics_chat.utils import validate_sql

logger = logging.getLogger(__name__)

_GREETING = re.compile(
    r"^(hi|hello|hey|greetings|good morning|good afternoon|good evening|howdy)$",
    re.IGNORECASE,
)
_GENERAL_QUESTION = re.compile(
    r"^(what|who|when|where|why|how|explain|tell me|help|can you)", re.IGNORECASE
)
_ASKING_FOR_DATA = re.compile(
    r"(how many|how much|count|number of|total|sum|average|rows? in|records? in)",
    re.IGNORECASE,
)
_BY_WORD = re.compile(r"\bby\b")
_CODE_FENCE = re.compile(r"```(?:json)?\n?", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

DATA_KEYWORDS = (
    "rows", "row", "count", "number", "how many", "how much", "total", "sum",
    "average", "avg", "max", "min", "table", "data", "query", "select", "show",
    "list", "find", "get", "sales", "revenue", "orders", "products", "customers",
    "sellers", "payments", "delivery", "category", "categories", "state", "month",
    "year", "quarter", "geolocation", "olist_", "customer", "seller", "order",
    "payment", "review", "product",
)

RESPONSE_EXCERPT_CHARS = 200


def is_greeting(question: str) -> bool:
    """Whole-string, case-insensitive greeting match."""
    return bool(_GREETING.match(question.strip()))


def has_data_keywords(question: str) -> bool:
    lowered = question.lower()
    return any(keyword in lowered for keyword in DATA_KEYWORDS) or bool(
        _BY_WORD.search(lowered)
    )


def is_general_question(question: str) -> bool:
    """A question about the tool rather than the data.

    Starts like a question, mentions no data keyword and does not ask for a
    number.
    """
    lowered = question.lower().strip()
    return (
        bool(_GENERAL_QUESTION.match(lowered))
        and not has_data_keywords(lowered)
        and not _ASKING_FOR_DATA.search(question)
    )


def parse_model_response(text: str) -> dict[str, Any]:
    """Decode the model's JSON answer.

    Tolerates Markdown code fences and surrounding prose.

    Raises:
        GenerationError: If no JSON object can be recovered
    """
    candidate = text.strip()
    if candidate.startswith("```"):
        candidate = _CODE_FENCE.sub("", candidate).strip()

    try:
        parsed = json.loads(candidate)
    except ValueError:
        logger.error("JSON parse error, response text: %s", text[:500])
        match = _JSON_OBJECT.search(candidate)
        if match is None:
            raise GenerationError(
                f"Invalid JSON response from model. Response: {text[:RESPONSE_EXCERPT_CHARS]}"
            )
        try:
            parsed = json.loads(match.group(0))
        except ValueError as e:
            raise GenerationError(
                f"Failed to parse JSON response from model. Response: {text[:RESPONSE_EXCERPT_CHARS]}"
            ) from e

    if not isinstance(parsed, dict):
        raise GenerationError(
            f"Expected a JSON object from model. Response: {text[:RESPONSE_EXCERPT_CHARS]}"
        )
    return parsed


def _visualization_type(value: Any) -> str:
    if value in VISUALIZATION_TYPES:
        return value
    if value:
        logger.warning("Unknown visualization type %r, using table", value)
    return "table"


class SQLGenerator:
    """Turns questions into SQL through a TextGenerator.

    Example:
        ```python
        generator = SQLGenerator(text_generator=GeminiTextGenerator.create())
        result = await generator.generate("Total revenue by state")
        if isinstance(result, GeneratedQuery):
            print(result.sql)
        ```
    """

    def __init__(self, text_generator: TextGenerator, history_limit: int | None = None) -> None:
        self._text_generator = text_generator
        self._history_limit = settings.history_limit if history_limit is None else history_limit

    async def generate(
        self,
        question: str,
        history: list[ConversationTurn] | None = None,
    ) -> SQLGenerationResult:
        """Generate SQL for ``question``.

        Args:
            question: The user's question
            history: Earlier turns, most recent last; only the last few are used

        Returns:
            ConversationalReply when no query is needed, else GeneratedQuery

        Raises:
            GenerationError: If the model call fails or its answer is unparsable
            SQLValidationError: If the generated SQL fails the safety checks
        """
        if is_greeting(question):
            return ConversationalReply(explanation=GREETING_REPLY)
        if is_general_question(question):
            return ConversationalReply(explanation=GENERAL_REPLY)

        history_text = format_turns(recent_turns(history, self._history_limit))
        prompt = build_sql_prompt(question, history_text)

        generated = await self._text_generator.generate(prompt)
        parsed = parse_model_response(generated.text)

        sql = parsed.get("sql") or ""
        if not isinstance(sql, str):
            raise GenerationError(f"Model returned a non-string sql field: {sql!r}")
        explanation = parsed.get("explanation") or ""

        if not sql.strip():
            return ConversationalReply(explanation=explanation or DEFAULT_CONVERSATIONAL_REPLY)

        cleaned = sql.strip()
        if cleaned.endswith(";"):
            cleaned = cleaned[:-1].strip()

        check = validate_sql(cleaned)
        if not check.valid:
            logger.error("SQL validation failed: %s; generated SQL: %s", check.error, cleaned)
            raise SQLValidationError(check.error or "Invalid SQL generated", sql=cleaned)

        return GeneratedQuery(
            sql=cleaned,
            explanation=explanation or "Query executed successfully",
            visualization_type=_visualization_type(parsed.get("visualizationType")),
        )
