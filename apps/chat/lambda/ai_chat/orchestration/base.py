"""Orchestration interfaces for chat execution."""

from typing import Protocol

from ai_chat.providers.base import ChatCompletionRequest, ChatCompletionResponse


class CompletionDispatcher(Protocol):
    def dispatch(
        self,
        provider_name: str,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionResponse: ...


class ChatOrchestrator(Protocol):
    def run(self, provider_name: str, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Execute the chat request using the selected orchestration strategy."""
