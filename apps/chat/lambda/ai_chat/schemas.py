"""Pydantic schemas for the AI chat API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import MAX_MESSAGE_LENGTH


class HistoryMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    character_id: int | None = Field(default=None, alias="characterId")
    provider: str = ""
    history: list[HistoryMessage] = Field(default_factory=list)
    session_id: str | None = Field(default=None, alias="sessionId")


class TokenUsage(BaseModel):
    prompt: int
    completion: int
    total: int


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    model: str
    provider: str
    character_id: int = Field(alias="characterId")
    session_id: str | None = Field(default=None, alias="sessionId")
    token_usage: TokenUsage = Field(alias="tokenUsage")
    duration_seconds: float = Field(alias="durationSeconds")


class ModelEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    model: str
    display_name: str = Field(alias="displayName")


class Character(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str
    description: str = ""
    system_prompt: str = Field(alias="systemPrompt")
    avatar: str = ""
    personality_tags: tuple[str, ...] = Field(default=(), alias="personalityTags")
    greeting_message: str = Field(default="", alias="greetingMessage")
    is_active: bool = Field(default=True, alias="isActive")


class ModelCatalogResponse(BaseModel):
    models: list[ModelEntry]


class CharacterCatalogResponse(BaseModel):
    characters: list[Character]


class ReloadResponse(BaseModel):
    message: str
    providers: list[str]
