"""Shared error-body helpers for handlers."""

from fastapi import status
from fastapi.responses import JSONResponse

from analytics_chat.dto import ErrorResponse
from analytics_chat.errors import InputError

QUESTION_REQUIRED = "Question is required and must be a string"


def require_question(question: object) -> str:
    """Return ``question`` if it is a non-blank string.

    Raises:
        InputError: Otherwise
    """
    if not isinstance(question, str) or not question.strip():
        raise InputError(QUESTION_REQUIRED)
    return question


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    """Render an error body, leaving out unset fields."""
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def bad_request(message: str) -> JSONResponse:
    """400 response carrying only ``error``."""
    return error_response(status.HTTP_400_BAD_REQUEST, ErrorResponse(error=message))
