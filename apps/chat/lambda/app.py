"""AI chat API backend using FastAPI + Mangum for AWS Lambda."""

import logging
import os
from functools import lru_cache

from fastapi import APIRouter, FastAPI, HTTPException
from mangum import Mangum

from ai_chat.crypto import CredentialCipher
from ai_chat.errors import BadRequestError, ChatError, ConfigurationError
from ai_chat.infra.runtime import (
    ensure_langsmith_configured,
    flush_langsmith_traces,
    get_characters_table,
    get_encryption_secret,
    get_providers_table,
)
from ai_chat.infra.stores import DynamoCharacterStore, DynamoProviderConfigStore
from ai_chat.orchestration.base import ChatOrchestrator
from ai_chat.orchestration.direct import DirectChatOrchestrator
from ai_chat.orchestration.langgraph_flow import LangGraphChatOrchestrator
from ai_chat.provider_registry import ProviderRegistry
from ai_chat.schemas import (
    CharacterCatalogResponse,
    ChatRequest,
    ChatResponse,
    ModelCatalogResponse,
    ReloadResponse,
)
from ai_chat.services.ai_service import AIService
from ai_chat.services.chat_service import ChatService

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

SERVICE_UNAVAILABLE_DETAIL = "AI service is not configured, please try again later"
PROVIDER_FAILURE_DETAIL = "AI service is temporarily unavailable, please try again later"

app = FastAPI()
router = APIRouter(prefix="/api")


@lru_cache(maxsize=1)
def get_ai_service() -> AIService:
    service = AIService(
        registry=ProviderRegistry(),
        cipher=CredentialCipher(get_encryption_secret()),
        provider_store=DynamoProviderConfigStore(get_providers_table()),
        character_store=DynamoCharacterStore(get_characters_table()),
    )
    service.bootstrap()
    return service


def _build_orchestrator(ai_service: AIService) -> ChatOrchestrator:
    if os.environ.get("CHAT_ORCHESTRATOR", "direct").lower() == "langgraph":
        return LangGraphChatOrchestrator(ai_service)
    return DirectChatOrchestrator(ai_service)


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    ai_service = get_ai_service()
    return ChatService(ai_service=ai_service, orchestrator=_build_orchestrator(ai_service))


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest) -> ChatResponse:
    """Send the conversation to the selected AI provider and return its reply."""
    ensure_langsmith_configured()
    try:
        return get_chat_service().handle_chat(request)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ConfigurationError as e:
        logger.warning("Chat request could not be served", extra={"reason": str(e)})
        raise HTTPException(status_code=503, detail=SERVICE_UNAVAILABLE_DETAIL) from e
    except ChatError as e:
        logger.exception("AI provider call failed")
        raise HTTPException(status_code=502, detail=PROVIDER_FAILURE_DETAIL) from e
    finally:
        flush_langsmith_traces()


@router.get("/models", response_model=ModelCatalogResponse)
def list_models() -> ModelCatalogResponse:
    return ModelCatalogResponse(models=list(get_ai_service().get_model_catalog()))


@router.get("/characters", response_model=CharacterCatalogResponse)
def list_characters() -> CharacterCatalogResponse:
    try:
        characters = get_ai_service().get_character_catalog()
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=SERVICE_UNAVAILABLE_DETAIL) from e
    return CharacterCatalogResponse(characters=list(characters))


@router.post("/providers/reload", response_model=ReloadResponse)
def reload_providers() -> ReloadResponse:
    names = get_ai_service().reload()
    return ReloadResponse(message="AI provider configuration reloaded", providers=names)


@router.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(router)


handler = Mangum(app)
