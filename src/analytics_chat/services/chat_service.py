"""Conversational answers, reusing cached analytics results when possible."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from analytics_chat.config import settings
from analytics_chat.entities import ConversationTurn, format_turns, recent_turns
from analytics_chat.errors import BackendError
from analytics_chat.prompts import build_chat_prompt
from analytics_chat.protocols import TextGenerator
from analytics_chat.services.analytics_service import AnalyticsService
from analytics_chat.services.cache_service import CacheService
from analytics_chat.services.query_executor import QueryExecutor
from analytics_chat.services.sql_generator import is_greeting
from analytics_chat.services.summaries import summarize_answer
from analytics_chat.utils import derive_chat_key

logger = logging.getLogger(__name__)

WITH_DATA_CONTEXT = "with-data"


@dataclass(frozen=True)
class ChatAnswer:
    """Chat reply payload (``{"text": ..., "usage": ...}``) and its origin."""

    response: dict[str, Any]
    cached: bool


class ChatService:
    """Answers chat questions.

    Lookup order: cached analytics answer for the same question, cached chat
    answer, then a fresh text-generation call.
    """

    def __init__(
        self,
        cache: CacheService,
        text_generator: TextGenerator,
        executor: QueryExecutor,
        analytics: AnalyticsService,
        sample_table: str | None = None,
        sample_limit: int | None = None,
        history_limit: int | None = None,
    ) -> None:
        self._cache = cache
        self._text_generator = text_generator
        self._executor = executor
        self._analytics = analytics
        self._sample_table = sample_table or settings.chat_sample_table
        self._sample_limit = sample_limit or settings.chat_sample_limit
        self._history_limit = settings.history_limit if history_limit is None else history_limit

    async def answer(
        self,
        question: str,
        include_data: bool = False,
        history: list[ConversationTurn] | None = None,
    ) -> ChatAnswer:
        """Answer ``question`` conversationally.

        Raises:
            GenerationError: If the text-generation call fails
        """
        if not is_greeting(question):
            analytics_answer = self._analytics.cached_answer(question)
            if analytics_answer is not None and analytics_answer.data:
                return ChatAnswer(response={"text": summarize_answer(analytics_answer)}, cached=True)

        cache_key = derive_chat_key(question, WITH_DATA_CONTEXT if include_data else None)
        cached = self._cache.get(cache_key)
        if isinstance(cached, str) and cached:
            return ChatAnswer(response={"text": cached}, cached=True)
        if isinstance(cached, dict) and isinstance(cached.get("text"), str):
            return ChatAnswer(response=cached, cached=True)

        context = await self._build_context(include_data, history)
        generated = await self._text_generator.generate(build_chat_prompt(question, context))

        response = generated.to_payload()
        self._cache.set(cache_key, response)
        return ChatAnswer(response=response, cached=False)

    async def _build_context(
        self,
        include_data: bool,
        history: list[ConversationTurn] | None,
    ) -> str:
        sections: list[str] = []

        if include_data:
            try:
                rows = await self._executor.sample_rows(self._sample_table, self._sample_limit)
            except BackendError as e:
                logger.warning("Sample data unavailable, continuing without it: %s", e)
                rows = []
            if rows:
                sections.append(
                    "Here's some sample order data from the Brazilian E-Commerce dataset:\n"
                    f"{json.dumps(rows, indent=2, default=str)}\n\n"
                    "Use this data to help answer the user's question."
                )

        turns = recent_turns(history, self._history_limit)
        if turns:
            sections.append(f"Conversation so far:\n{format_turns(turns)}")

        return "\n\n".join(sections)
