"""Shared constants and literal types for the AI chat Lambda."""

from typing import Literal

AWS_REGION = "ap-northeast-1"
LANGSMITH_API_KEY_PARAMETER_NAME = "/personal-website/langsmith-api-key"
ENCRYPTION_KEY_PARAMETER_NAME = "/personal-website/encryption-key"
LANGSMITH_PROJECT = "personal-website"

ENCRYPTION_KEY_ENV = "ENCRYPTION_KEY"
# Development only. Production deployments must set ENCRYPTION_KEY or the SSM parameter.
DEFAULT_ENCRYPTION_SECRET = "personal-website-default-key!!"
ENCRYPTION_KEY_SIZE = 32
ENCRYPTION_NONCE_SIZE = 12
ENCRYPTION_TAG_SIZE = 16
ENCRYPTED_MIN_LENGTH = 20

PROVIDERS_TABLE_ENV = "AI_PROVIDERS_TABLE"
CHARACTERS_TABLE_ENV = "AI_CHARACTERS_TABLE"
DEFAULT_PROVIDERS_TABLE = "ai_providers"
DEFAULT_CHARACTERS_TABLE = "ai_characters"

REQUEST_TIMEOUT_SECONDS = 60.0
CATALOG_CACHE_TTL_SECONDS = 5 * 60.0
ERROR_BODY_EXCERPT_LENGTH = 500

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
HISTORY_LIMIT = 20
MAX_MESSAGE_LENGTH = 10000

Role = Literal["system", "user", "assistant"]
ProviderName = Literal["glm", "deepseek", "qwen", "kimi", "openai"]

# Registration order matters: the first vendor found in the environment becomes the default.
PROVIDER_NAMES: tuple[ProviderName, ...] = ("glm", "deepseek", "qwen", "kimi", "openai")
