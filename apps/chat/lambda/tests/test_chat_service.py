import unittest
from unittest.mock import Mock

from ai_chat.errors import BadRequestError, ConfigurationError, NoProvidersConfiguredError
from ai_chat.providers.base import (
    ChatChoice,
    ChatCompletionResponse,
    ChatMessage,
    ChatUsage,
)
from ai_chat.schemas import Character, ChatRequest
from ai_chat.services.chat_service import ChatService

ASSISTANT = Character(id=1, name="Assistant", system_prompt="You are helpful.")
TUTOR = Character(id=2, name="Tutor", system_prompt="You teach patiently.")


def make_ai_service(characters=(ASSISTANT, TUTOR), providers=("glm", "deepseek")) -> Mock:
    ai_service = Mock()
    ai_service.get_character_catalog.return_value = tuple(characters)
    ai_service.has_provider.side_effect = lambda name: name in providers
    ai_service.registry.default_name = providers[0] if providers else ""
    return ai_service


class ChatServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.orchestrator = Mock()
        self.orchestrator.run.return_value = ChatCompletionResponse(
            id="resp_123",
            model="glm-4-flash",
            choices=(
                ChatChoice(
                    index=0,
                    message=ChatMessage("assistant", "assistant reply"),
                    finish_reason="stop",
                ),
            ),
            usage=ChatUsage(prompt_tokens=11, completion_tokens=22, total_tokens=33),
        )

    def test_handle_chat_delegates_to_orchestrator_and_maps_response(self) -> None:
        service = ChatService(ai_service=make_ai_service(), orchestrator=self.orchestrator)
        request = ChatRequest(
            message="hello",
            history=[
                {"role": "user", "content": "earlier"},
                {"role": "assistant", "content": "earlier reply"},
            ],
            sessionId="session-1",
        )

        response = service.handle_chat(request)

        self.assertEqual(response.reply, "assistant reply")
        self.assertEqual(response.model, "glm-4-flash")
        self.assertEqual(response.provider, "glm")
        self.assertEqual(response.character_id, 1)
        self.assertEqual(response.session_id, "session-1")
        self.assertEqual(response.token_usage.prompt, 11)
        self.assertEqual(response.token_usage.completion, 22)
        self.assertEqual(response.token_usage.total, 33)
        self.assertGreaterEqual(response.duration_seconds, 0)

        self.orchestrator.run.assert_called_once()
        provider_name, completion_request = self.orchestrator.run.call_args.args
        self.assertEqual(provider_name, "glm")
        self.assertEqual(
            [(message.role, message.content) for message in completion_request.messages],
            [
                ("system", "You are helpful."),
                ("user", "earlier"),
                ("assistant", "earlier reply"),
                ("user", "hello"),
            ],
        )
        self.assertEqual(completion_request.temperature, 0.7)
        self.assertEqual(completion_request.max_tokens, 2000)

    def test_explicit_character_and_provider(self) -> None:
        service = ChatService(ai_service=make_ai_service(), orchestrator=self.orchestrator)

        response = service.handle_chat(
            ChatRequest(message="hello", characterId=2, provider="deepseek")
        )

        self.assertEqual(response.character_id, 2)
        self.assertEqual(response.provider, "deepseek")
        provider_name, completion_request = self.orchestrator.run.call_args.args
        self.assertEqual(provider_name, "deepseek")
        self.assertEqual(completion_request.messages[0].content, "You teach patiently.")

    def test_unknown_provider_is_a_bad_request(self) -> None:
        service = ChatService(ai_service=make_ai_service(), orchestrator=self.orchestrator)

        with self.assertRaisesRegex(BadRequestError, "kimi"):
            service.handle_chat(ChatRequest(message="hello", provider="kimi"))
        self.orchestrator.run.assert_not_called()

    def test_unknown_character_is_a_bad_request(self) -> None:
        service = ChatService(ai_service=make_ai_service(), orchestrator=self.orchestrator)

        with self.assertRaises(BadRequestError):
            service.handle_chat(ChatRequest(message="hello", characterId=99))

    def test_missing_characters_is_a_configuration_error(self) -> None:
        service = ChatService(
            ai_service=make_ai_service(characters=()), orchestrator=self.orchestrator
        )

        with self.assertRaises(ConfigurationError):
            service.handle_chat(ChatRequest(message="hello"))

    def test_reported_provider_is_the_one_dispatched(self) -> None:
        ai_service = make_ai_service()
        service = ChatService(ai_service=ai_service, orchestrator=self.orchestrator)
        response_value = self.orchestrator.run.return_value

        def reload_during_dispatch(provider_name, request):
            ai_service.registry.default_name = "deepseek"
            return response_value

        self.orchestrator.run.side_effect = reload_during_dispatch

        response = service.handle_chat(ChatRequest(message="hello"))

        self.assertEqual(self.orchestrator.run.call_args.args[0], "glm")
        self.assertEqual(response.provider, "glm")

    def test_no_default_provider_is_a_configuration_error(self) -> None:
        service = ChatService(
            ai_service=make_ai_service(providers=()), orchestrator=self.orchestrator
        )

        with self.assertRaises(NoProvidersConfiguredError):
            service.handle_chat(ChatRequest(message="hello"))
        self.orchestrator.run.assert_not_called()


if __name__ == "__main__":
    unittest.main()
