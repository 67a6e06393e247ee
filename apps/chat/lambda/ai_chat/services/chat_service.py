"""Application service for chat requests."""

import logging
import time

from ai_chat.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from ai_chat.errors import BadRequestError, ConfigurationError, NoProvidersConfiguredError
from ai_chat.message_mappers import build_chat_messages
from ai_chat.orchestration.base import ChatOrchestrator
from ai_chat.providers.base import ChatCompletionRequest
from ai_chat.schemas import Character, ChatRequest, ChatResponse, TokenUsage
from ai_chat.services.ai_service import AIService

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, ai_service: AIService, orchestrator: ChatOrchestrator) -> None:
        self._ai_service = ai_service
        self._orchestrator = orchestrator

    def handle_chat(self, request: ChatRequest) -> ChatResponse:
        logger.info(
            "Chat request received",
            extra={"history_count": len(request.history), "provider": request.provider or None},
        )

        if request.provider and not self._ai_service.has_provider(request.provider):
            raise BadRequestError(f"Requested AI model is unavailable: {request.provider}")

        # Resolved once: dispatch and the response must name the same provider.
        provider_name = request.provider or self._ai_service.registry.default_name
        if not provider_name:
            raise NoProvidersConfiguredError()

        character = self._resolve_character(request.character_id)
        completion_request = ChatCompletionRequest(
            messages=build_chat_messages(character.system_prompt, request.history, request.message),
            temperature=DEFAULT_TEMPERATURE,
            max_tokens=DEFAULT_MAX_TOKENS,
        )

        start = time.time()
        response = self._orchestrator.run(provider_name, completion_request)
        duration_ms = int((time.time() - start) * 1000)

        return ChatResponse(
            reply=response.reply,
            model=response.model,
            provider=provider_name,
            character_id=character.id,
            session_id=request.session_id,
            token_usage=TokenUsage(
                prompt=response.usage.prompt_tokens,
                completion=response.usage.completion_tokens,
                total=response.usage.total_tokens,
            ),
            duration_seconds=round(duration_ms / 1000, 2),
        )

    def _resolve_character(self, character_id: int | None) -> Character:
        characters = self._ai_service.get_character_catalog()
        if character_id is not None:
            for character in characters:
                if character.id == character_id:
                    return character
            raise BadRequestError(f"AI character not found: {character_id}")
        if not characters:
            raise ConfigurationError("No AI characters are configured")
        return characters[0]
