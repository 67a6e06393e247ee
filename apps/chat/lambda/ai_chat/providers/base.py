"""Provider interface and the vendor-neutral chat-completion types."""

from dataclasses import dataclass, field
from typing import Protocol

from ai_chat.constants import DEFAULT_TEMPERATURE, Role


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatCompletionRequest:
    messages: tuple[ChatMessage, ...]
    # Each adapter sends its own configured model; this field is informational.
    model: str = ""
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int | None = None
    stream: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence from callers while keeping the request immutable.
        object.__setattr__(self, "messages", tuple(self.messages))
        if not 0 <= self.temperature <= 2:
            raise ValueError(f"temperature must be within [0, 2], got {self.temperature}")
        if self.max_tokens is not None and self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.stream:
            raise ValueError("streaming chat completions are not supported")


@dataclass(frozen=True)
class ChatUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self) -> None:
        if min(self.prompt_tokens, self.completion_tokens, self.total_tokens) < 0:
            raise ValueError("token usage counts must be non-negative")


@dataclass(frozen=True)
class ChatChoice:
    index: int
    message: ChatMessage
    finish_reason: str


@dataclass(frozen=True)
class ChatCompletionResponse:
    id: str
    model: str
    choices: tuple[ChatChoice, ...]
    usage: ChatUsage = field(default_factory=ChatUsage)
    object: str = "chat.completion"

    @property
    def reply(self) -> str:
        return self.choices[0].message.content


class ChatProvider(Protocol):
    def chat_completion(
        self, request: ChatCompletionRequest, *, timeout: float | None = None
    ) -> ChatCompletionResponse:
        """Send a vendor-neutral request and return the normalized response."""
        ...

    def model_name(self) -> str: ...

    def provider_name(self) -> str: ...
