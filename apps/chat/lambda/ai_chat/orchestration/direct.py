"""Direct provider dispatch orchestration."""

from ai_chat.orchestration.base import ChatOrchestrator, CompletionDispatcher
from ai_chat.providers.base import ChatCompletionRequest, ChatCompletionResponse


class DirectChatOrchestrator(ChatOrchestrator):
    def __init__(self, dispatcher: CompletionDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, provider_name: str, request: ChatCompletionRequest) -> ChatCompletionResponse:
        return self._dispatcher.dispatch(provider_name, request)
