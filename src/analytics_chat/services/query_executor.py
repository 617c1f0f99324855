"""Query execution through the ``execute_sql`` stored procedure."""

import json
import logging
from typing import Any

from analytics_chat.config import settings
from analytics_chat.entities import QueryResult
from analytics_chat.errors import BackendError, ExecutionError
from analytics_chat.protocols import SqlBackend
from analytics_chat.utils import check_procedure_input

logger = logging.getLogger(__name__)


def clean_statement(sql: str) -> str:
    """Trim, drop one trailing ``;`` and keep only the first statement."""
    cleaned = sql.strip()
    if cleaned.endswith(";"):
        cleaned = cleaned[:-1].strip()

    statements = [part for part in cleaned.split(";") if part.strip()]
    if len(statements) > 1:
        logger.warning("Multiple SQL statements detected, using first one only")
        cleaned = statements[0].strip()
    return cleaned


def rows_from_payload(payload: Any) -> list[dict[str, Any]]:
    """Normalize the procedure result: a list, JSON text, or nothing."""
    if isinstance(payload, str):
        payload = json.loads(payload)
    if isinstance(payload, list):
        return payload
    return []


class QueryExecutor:
    """Runs read-only SQL through a SqlBackend."""

    def __init__(self, backend: SqlBackend, procedure_name: str | None = None) -> None:
        self._backend = backend
        self._procedure = procedure_name or settings.sql_procedure_name

    async def execute(self, sql: str) -> QueryResult:
        """Execute ``sql`` and return rows with their column order.

        Raises:
            ExecutionError: If the procedure's rules reject the statement or
                the database fails
        """
        cleaned = clean_statement(sql)

        check = check_procedure_input(cleaned)
        if not check.valid:
            raise ExecutionError(f"SQL execution failed: {check.error}", sql=cleaned)

        try:
            payload = await self._backend.call_procedure(
                self._procedure, {"query_text": cleaned}
            )
            rows = rows_from_payload(payload)
        except BackendError as e:
            logger.error("Query execution error: %s; SQL: %s", e, cleaned)
            raise ExecutionError(f"SQL execution failed: {e}", sql=cleaned) from e
        except ValueError as e:
            raise ExecutionError(f"SQL execution failed: unreadable result ({e})", sql=cleaned) from e

        return QueryResult.from_rows(rows)

    async def sample_rows(self, table: str, limit: int) -> list[dict[str, Any]]:
        """Fetch a bounded sample of rows for grounding chat answers.

        Raises:
            BackendError: If the backend fails
        """
        return await self._backend.select_rows(table, limit)
