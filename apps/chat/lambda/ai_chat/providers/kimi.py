"""Moonshot Kimi adapter."""

from .openai_compatible import OpenAICompatibleProvider


class KimiProvider(OpenAICompatibleProvider):
    vendor = "kimi"
    label = "Kimi"
