"""LangGraph-based orchestration strategy for chat execution."""

from typing import NotRequired, TypedDict, cast

from langgraph.graph import END, START, StateGraph

from ai_chat.providers.base import ChatCompletionRequest, ChatCompletionResponse

from .base import ChatOrchestrator, CompletionDispatcher


class ChatGraphState(TypedDict):
    provider_name: str
    request: ChatCompletionRequest
    response: NotRequired[ChatCompletionResponse]


class LangGraphChatOrchestrator(ChatOrchestrator):
    def __init__(self, dispatcher: CompletionDispatcher) -> None:
        self._dispatcher = dispatcher
        graph = StateGraph(ChatGraphState)
        graph.add_node("dispatch_provider", self._dispatch_provider)
        graph.add_edge(START, "dispatch_provider")
        graph.add_edge("dispatch_provider", END)
        self._graph = graph.compile()

    def _dispatch_provider(self, state: ChatGraphState) -> dict[str, ChatCompletionResponse]:
        return {
            "response": self._dispatcher.dispatch(state["provider_name"], state["request"]),
        }

    def run(self, provider_name: str, request: ChatCompletionRequest) -> ChatCompletionResponse:
        initial_state: ChatGraphState = {
            "provider_name": provider_name,
            "request": request,
        }
        result = cast("ChatGraphState", self._graph.invoke(initial_state))
        response = result.get("response")
        if response is None:
            raise RuntimeError("LangGraph execution did not return a provider response")
        return response
