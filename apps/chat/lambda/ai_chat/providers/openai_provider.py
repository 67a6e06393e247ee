"""OpenAI adapter: the canonical dialect, validated by the shared wire models."""

from .openai_compatible import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    vendor = "openai"
    label = "OpenAI"
