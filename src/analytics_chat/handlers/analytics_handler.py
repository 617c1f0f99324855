"""HTTP handler for analytics questions."""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from analytics_chat.dto import AnalyticsQueryRequest, ErrorResponse, QueryResponse
from analytics_chat.errors import (
    ExecutionError,
    GenerationError,
    InputError,
    SQLValidationError,
)
from analytics_chat.services import AnalyticsService

from .errors import bad_request, error_response, require_question

logger = logging.getLogger(__name__)

EXECUTION_HINT = (
    "Make sure the execute_sql RPC function is set up in Supabase. See db/rpc_function.sql"
)
GENERIC_HINT = "Check the server logs for more details"


class AnalyticsHandler:
    """HTTP handler for POST /analytics-query.

    Converts the request DTO into a service call and maps each error kind
    onto its documented response body.
    """

    def __init__(self, analytics_service: AnalyticsService) -> None:
        self._analytics = analytics_service

    async def query(self, request: AnalyticsQueryRequest) -> QueryResponse | JSONResponse:
        """Handle POST /analytics-query requests."""
        try:
            question = require_question(request.question)
            answer = await self._analytics.answer(question, request.history_entities())
            return QueryResponse.from_entity(answer)

        except InputError as e:
            return bad_request(str(e))

        except ExecutionError as e:
            logger.error("Query execution error: %s; generated SQL: %s", e, e.sql)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to execute query",
                    message=str(e),
                    sql=e.sql,
                    explanation=e.explanation,
                    hint=EXECUTION_HINT,
                ),
            )

        except SQLValidationError as e:
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to process your query",
                    message=str(e),
                    sql=e.sql,
                    hint=GENERIC_HINT,
                ),
            )

        except GenerationError as e:
            logger.error("Query API error for %r: %s", request.question[:100], e)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to process your query",
                    message=str(e),
                    hint=GENERIC_HINT,
                ),
            )

        except Exception as e:
            logger.exception("Unexpected query API error for %r", request.question[:100])
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to process your query",
                    message=str(e) or type(e).__name__,
                    hint=GENERIC_HINT,
                ),
            )
