"""Vendor-tag registration table for constructing provider adapters."""

from dataclasses import dataclass

import httpx

from ai_chat.constants import ProviderName
from ai_chat.errors import UnknownProviderError

from .deepseek import DeepSeekProvider
from .glm import GLMProvider
from .kimi import KimiProvider
from .openai_compatible import OpenAICompatibleProvider
from .openai_provider import OpenAIProvider
from .qwen import QwenProvider


@dataclass(frozen=True)
class VendorDefaults:
    env_prefix: str
    endpoint: str
    model: str


PROVIDER_FACTORIES: dict[str, type[OpenAICompatibleProvider]] = {
    "glm": GLMProvider,
    "deepseek": DeepSeekProvider,
    "qwen": QwenProvider,
    "kimi": KimiProvider,
    "openai": OpenAIProvider,
}

VENDOR_DEFAULTS: dict[ProviderName, VendorDefaults] = {
    "glm": VendorDefaults(
        env_prefix="GLM",
        endpoint="https://open.bigmodel.cn/api/paas/v4",
        model="glm-4-flash",
    ),
    "deepseek": VendorDefaults(
        env_prefix="DEEPSEEK",
        endpoint="https://api.deepseek.com/v1",
        model="deepseek-chat",
    ),
    "qwen": VendorDefaults(
        env_prefix="QWEN",
        endpoint="https://dashscope.aliyuncs.com/compatible-mode/v1",
        model="qwen-turbo",
    ),
    "kimi": VendorDefaults(
        env_prefix="KIMI",
        endpoint="https://api.moonshot.cn/v1",
        model="moonshot-v1-8k",
    ),
    "openai": VendorDefaults(
        env_prefix="OPENAI",
        endpoint="https://api.openai.com/v1",
        model="gpt-3.5-turbo",
    ),
}


def create_provider(
    name: str,
    endpoint: str,
    api_key: str,
    model: str,
    *,
    http_client: httpx.Client | None = None,
) -> OpenAICompatibleProvider:
    factory = PROVIDER_FACTORIES.get(name)
    if factory is None:
        raise UnknownProviderError(name)
    return factory(endpoint, api_key, model, http_client=http_client)
