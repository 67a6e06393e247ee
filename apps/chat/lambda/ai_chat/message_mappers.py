"""Conversion helpers between API messages and the vendor-neutral provider format."""

from collections.abc import Sequence

from .constants import HISTORY_LIMIT
from .providers.base import ChatMessage
from .schemas import HistoryMessage


def build_chat_messages(
    system_prompt: str,
    history: Sequence[HistoryMessage],
    user_message: str,
    history_limit: int = HISTORY_LIMIT,
) -> tuple[ChatMessage, ...]:
    """System prompt first, then the most recent history turns in order, then the new user turn."""
    messages: list[ChatMessage] = []
    if system_prompt:
        messages.append(ChatMessage(role="system", content=system_prompt))

    recent = history[-history_limit:] if history_limit > 0 else []
    messages.extend(ChatMessage(role=turn.role, content=turn.content) for turn in recent)

    messages.append(ChatMessage(role="user", content=user_message))
    return tuple(messages)
