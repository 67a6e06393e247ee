"""DeepSeek adapter (OpenAI-compatible dialect)."""

from .openai_compatible import OpenAICompatibleProvider


class DeepSeekProvider(OpenAICompatibleProvider):
    vendor = "deepseek"
    label = "DeepSeek"
