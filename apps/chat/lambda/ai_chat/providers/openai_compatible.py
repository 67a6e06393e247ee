"""HTTP plumbing shared by every OpenAI-style chat-completions vendor."""

import logging
import time
from typing import Any, ClassVar

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, OpenAI
from pydantic import BaseModel, Field, ValidationError

from ai_chat.constants import ERROR_BODY_EXCERPT_LENGTH, REQUEST_TIMEOUT_SECONDS, Role
from ai_chat.errors import (
    ProviderAPIError,
    ProviderHTTPError,
    ResponseDecodeError,
    TransportError,
)

from .base import (
    ChatChoice,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ChatUsage,
)

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"


class VendorMessage(BaseModel):
    role: Role = "assistant"
    content: str | None = None


class VendorChoice(BaseModel):
    index: int = 0
    message: VendorMessage
    finish_reason: str | None = None


class VendorUsage(BaseModel):
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)


class VendorCompletion(BaseModel):
    id: str = ""
    object: str | None = None
    model: str = ""
    choices: list[VendorChoice]
    usage: VendorUsage = Field(default_factory=VendorUsage)


class VendorErrorDetail(BaseModel):
    message: str = ""
    type: str | None = None
    code: str | int | None = None


class VendorErrorEnvelope(BaseModel):
    error: VendorErrorDetail


def _excerpt(text: str) -> str:
    return text[:ERROR_BODY_EXCERPT_LENGTH]


class OpenAICompatibleProvider:
    """Base adapter: vendor subclasses override only what their dialect changes."""

    vendor: ClassVar[str]
    label: ClassVar[str]
    completion_model: ClassVar[type[VendorCompletion]] = VendorCompletion

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        model: str,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._model = model
        self._client = OpenAI(
            api_key=api_key,
            base_url=self._endpoint,
            timeout=REQUEST_TIMEOUT_SECONDS,
            max_retries=0,
            http_client=http_client,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self._endpoint!r}, model={self._model!r})"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def model_name(self) -> str:
        return self._model

    def provider_name(self) -> str:
        return self.vendor

    def build_payload(self, request: ChatCompletionRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [message.to_dict() for message in request.messages],
            "temperature": request.temperature,
            "stream": False,
        }
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        return payload

    def chat_completion(
        self, request: ChatCompletionRequest, *, timeout: float | None = None
    ) -> ChatCompletionResponse:
        payload = self.build_payload(request)
        effective_timeout = (
            REQUEST_TIMEOUT_SECONDS if timeout is None else min(timeout, REQUEST_TIMEOUT_SECONDS)
        )

        start = time.time()
        try:
            http_response = self._client.post(
                CHAT_COMPLETIONS_PATH,
                cast_to=httpx.Response,
                body=payload,
                options={"timeout": effective_timeout},
            )
        except APIStatusError as e:
            raise self._status_error(e.response) from e
        except APITimeoutError as e:
            logger.warning(
                "Chat completion timed out",
                extra={"provider": self.vendor, "timeout_seconds": effective_timeout},
            )
            raise TransportError(
                f"{self.label} request timed out after {effective_timeout}s"
            ) from e
        except APIConnectionError as e:
            logger.warning(
                "Chat completion transport failure",
                extra={"provider": self.vendor},
                exc_info=True,
            )
            raise TransportError(f"{self.label} request failed: {e}") from e
        duration_ms = int((time.time() - start) * 1000)

        try:
            response = self.parse_completion(http_response.content)
        except ValidationError as e:
            logger.warning(
                "Chat completion body could not be decoded",
                extra={"provider": self.vendor, "body_excerpt": _excerpt(http_response.text)},
            )
            raise ResponseDecodeError(f"{self.label} returned an unexpected response body") from e
        if not response.choices:
            raise ResponseDecodeError(f"{self.label} returned no choices")

        usage = response.usage
        if usage.total_tokens != usage.prompt_tokens + usage.completion_tokens:
            logger.warning(
                "Vendor-reported token usage is inconsistent",
                extra={
                    "provider": self.vendor,
                    "usage_prompt_tokens": usage.prompt_tokens,
                    "usage_completion_tokens": usage.completion_tokens,
                    "usage_total_tokens": usage.total_tokens,
                },
            )
        logger.info(
            "Chat completion succeeded",
            extra={
                "provider": self.vendor,
                "model": response.model,
                "duration_ms": duration_ms,
                "usage_total_tokens": usage.total_tokens,
                "response_id": response.id,
            },
        )
        return response

    def parse_completion(self, body: bytes) -> ChatCompletionResponse:
        """Validate the vendor body and map it positionally onto the neutral shape."""
        completion = self.completion_model.model_validate_json(body)
        return ChatCompletionResponse(
            id=completion.id,
            object=self.object_tag(completion),
            model=completion.model,
            choices=tuple(
                ChatChoice(
                    index=choice.index,
                    message=ChatMessage(
                        role=choice.message.role, content=choice.message.content or ""
                    ),
                    finish_reason=choice.finish_reason or "",
                )
                for choice in completion.choices
            ),
            usage=ChatUsage(
                prompt_tokens=completion.usage.prompt_tokens,
                completion_tokens=completion.usage.completion_tokens,
                total_tokens=completion.usage.total_tokens,
            ),
        )

    def object_tag(self, completion: VendorCompletion) -> str:
        return completion.object or "chat.completion"

    def error_kind(self, detail: VendorErrorDetail) -> str | None:
        if detail.type:
            return detail.type
        return None if detail.code is None else str(detail.code)

    def parse_error(self, body: str) -> VendorErrorDetail | None:
        try:
            return VendorErrorEnvelope.model_validate_json(body).error
        except ValidationError:
            return None

    def _status_error(self, response: httpx.Response) -> ProviderAPIError | ProviderHTTPError:
        body = response.text
        detail = self.parse_error(body)
        if detail is not None and detail.message:
            kind = self.error_kind(detail)
            logger.warning(
                "Chat completion rejected by vendor",
                extra={
                    "provider": self.vendor,
                    "status_code": response.status_code,
                    "error_type": kind,
                    "error_message": detail.message,
                },
            )
            return ProviderAPIError(
                self.label,
                detail.message,
                status_code=response.status_code,
                error_type=kind,
            )

        logger.warning(
            "Chat completion HTTP failure",
            extra={
                "provider": self.vendor,
                "status_code": response.status_code,
                "body_excerpt": _excerpt(body),
            },
        )
        return ProviderHTTPError(response.status_code, _excerpt(body))
