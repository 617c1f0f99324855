"""Analytics orchestration: cache lookup, generation, execution, write-back.

Each request runs this sequence on its own. Concurrent misses on the same
question each generate and execute; there is no in-flight de-duplication.
"""

import dataclasses
import logging
import time

from analytics_chat.entities import (
    AnalyticsAnswer,
    ConversationalReply,
    ConversationTurn,
)
from analytics_chat.errors import ExecutionError
from analytics_chat.services.cache_service import CacheService
from analytics_chat.services.query_executor import QueryExecutor
from analytics_chat.services.sql_generator import SQLGenerator, is_greeting
from analytics_chat.utils import derive_query_key

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Answers analytics questions with SQL results.

    Example:
        ```python
        service = AnalyticsService(
            cache=CacheService.create(repository=RedisCacheRepository.create()),
            generator=SQLGenerator(text_generator=GeminiTextGenerator.create()),
            executor=QueryExecutor(backend=SupabaseRepository.create()),
        )
        answer = await service.answer("What is the total number of orders?")
        ```
    """

    def __init__(
        self,
        cache: CacheService,
        generator: SQLGenerator,
        executor: QueryExecutor,
    ) -> None:
        self._cache = cache
        self._generator = generator
        self._executor = executor

    def cached_answer(self, question: str) -> AnalyticsAnswer | None:
        """Return the cached answer for ``question``, if any.

        A cached payload that no longer matches the answer shape counts as a miss.
        """
        payload = self._cache.get(derive_query_key(question))
        if payload is None:
            return None
        try:
            return AnalyticsAnswer.from_payload(payload)
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring malformed cached answer for %r: %s", question[:100], e)
            return None

    async def answer(
        self,
        question: str,
        history: list[ConversationTurn] | None = None,
    ) -> AnalyticsAnswer:
        """Answer ``question``.

        Raises:
            GenerationError: If SQL generation fails
            SQLValidationError: If the generated SQL is unsafe
            ExecutionError: If the database fails the query
        """
        greeting = is_greeting(question)
        if not greeting:
            cached = self.cached_answer(question)
            if cached is not None:
                return dataclasses.replace(cached, cached=True)

        start = time.perf_counter()
        result = await self._generator.generate(question, history)

        if isinstance(result, ConversationalReply):
            return AnalyticsAnswer(
                sql="",
                explanation=result.explanation,
                visualization_type="table",
                execution_time=_elapsed_ms(start),
                is_conversational=True,
            )

        try:
            query_result = await self._executor.execute(result.sql)
        except ExecutionError as e:
            raise ExecutionError(str(e), sql=result.sql, explanation=result.explanation) from e

        answer = AnalyticsAnswer(
            sql=result.sql,
            explanation=result.explanation,
            data=query_result.data,
            columns=query_result.columns,
            visualization_type=result.visualization_type,
            execution_time=_elapsed_ms(start),
        )

        self._cache.set(derive_query_key(question), answer.to_payload())
        return answer


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
