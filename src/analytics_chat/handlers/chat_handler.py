"""HTTP handlers for chat and model listing."""

import logging

from fastapi import status
from fastapi.responses import JSONResponse

from analytics_chat.dto import (
    ChatRequest,
    ChatResponse,
    ChatText,
    ErrorResponse,
    ModelInfo,
    ModelsResponse,
)
from analytics_chat.errors import GenerationError, InputError
from analytics_chat.protocols import TextGenerator
from analytics_chat.services import ChatService

from .errors import bad_request, error_response, require_question

logger = logging.getLogger(__name__)

CONFIG_HINT = "Check that GOOGLE_AI_API_KEY and GEMINI_MODEL_NAME are set correctly"


class ChatHandler:
    """HTTP handlers for POST /chat and GET /models."""

    def __init__(self, chat_service: ChatService, text_generator: TextGenerator) -> None:
        self._chat = chat_service
        self._text_generator = text_generator

    async def chat(self, request: ChatRequest) -> ChatResponse | JSONResponse:
        """Handle POST /chat requests."""
        try:
            question = require_question(request.question)
            answer = await self._chat.answer(
                question,
                include_data=request.include_data,
                history=request.history_entities(),
            )
            return ChatResponse(
                response=ChatText.model_validate(answer.response),
                cached=answer.cached,
            )

        except InputError as e:
            return bad_request(str(e))

        except GenerationError as e:
            logger.error("Chat API error: %s", e)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to process your request",
                    message=str(e),
                    hint=CONFIG_HINT,
                ),
            )

        except Exception as e:
            logger.exception("Unexpected chat API error")
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to process your request",
                    message=str(e) or type(e).__name__,
                    hint=CONFIG_HINT,
                ),
            )

    async def list_models(self) -> ModelsResponse | JSONResponse:
        """Handle GET /models requests."""
        try:
            models = await self._text_generator.list_models()

            items = []
            for model in models:
                full_name = model.get("name") or model.get("model") or ""
                items.append(
                    ModelInfo(
                        name=full_name.removeprefix("models/"),
                        full_name=full_name,
                        display_name=model.get("displayName") or full_name,
                        description=model.get("description") or "",
                        supported_methods=model.get("supportedGenerationMethods") or [],
                    )
                )

            return ModelsResponse(models=items, count=len(items))

        except Exception as e:
            logger.error("Error listing models: %s", e)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(
                    error="Failed to list models. Check your API key.",
                    message=str(e) or type(e).__name__,
                    hint=CONFIG_HINT,
                ),
            )
