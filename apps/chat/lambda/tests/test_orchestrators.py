import unittest

from ai_chat.errors import ProviderNotFoundError, TransportError
from ai_chat.orchestration.direct import DirectChatOrchestrator
from ai_chat.orchestration.langgraph_flow import LangGraphChatOrchestrator
from ai_chat.providers.base import (
    ChatChoice,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ChatUsage,
)


class StubDispatcher:
    def __init__(
        self, response: ChatCompletionResponse | None = None, error: Exception | None = None
    ) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, ChatCompletionRequest]] = []

    def dispatch(
        self,
        provider_name: str,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionResponse:
        self.calls.append((provider_name, request))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response


class OrchestratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.request = ChatCompletionRequest(messages=(ChatMessage("user", "hello"),))
        self.expected_response = ChatCompletionResponse(
            id="resp_1",
            model="glm-4-flash",
            choices=(ChatChoice(index=0, message=ChatMessage("assistant", "ok"), finish_reason="stop"),),
            usage=ChatUsage(prompt_tokens=5, completion_tokens=7, total_tokens=12),
        )

    def test_direct_orchestrator_routes_to_dispatcher(self) -> None:
        dispatcher = StubDispatcher(self.expected_response)
        orchestrator = DirectChatOrchestrator(dispatcher)

        response = orchestrator.run("glm", self.request)

        self.assertEqual(response, self.expected_response)
        self.assertEqual(len(dispatcher.calls), 1)
        called_name, called_request = dispatcher.calls[0]
        self.assertEqual(called_name, "glm")
        self.assertIs(called_request, self.request)

    def test_direct_orchestrator_propagates_dispatch_errors(self) -> None:
        orchestrator = DirectChatOrchestrator(StubDispatcher(error=ProviderNotFoundError("kimi")))

        with self.assertRaisesRegex(ProviderNotFoundError, "AI provider not found: kimi"):
            orchestrator.run("kimi", self.request)

    def test_langgraph_orchestrator_routes_to_dispatcher(self) -> None:
        dispatcher = StubDispatcher(self.expected_response)
        orchestrator = LangGraphChatOrchestrator(dispatcher)

        response = orchestrator.run("", self.request)

        self.assertEqual(response, self.expected_response)
        self.assertEqual(len(dispatcher.calls), 1)
        called_name, called_request = dispatcher.calls[0]
        self.assertEqual(called_name, "")
        self.assertIs(called_request, self.request)

    def test_langgraph_orchestrator_propagates_dispatch_errors(self) -> None:
        orchestrator = LangGraphChatOrchestrator(StubDispatcher(error=TransportError("timed out")))

        with self.assertRaises(TransportError):
            orchestrator.run("glm", self.request)


if __name__ == "__main__":
    unittest.main()
