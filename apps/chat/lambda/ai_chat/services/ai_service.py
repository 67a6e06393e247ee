"""Provider bootstrap/reload and the cached model and character catalogs."""

import logging
import os
from collections.abc import Callable, Mapping

import httpx

from ai_chat.cache import ReadThroughCache
from ai_chat.constants import PROVIDER_NAMES
from ai_chat.crypto import CredentialCipher
from ai_chat.errors import ConfigurationError, UnknownProviderError
from ai_chat.infra.stores import CharacterStore, ProviderConfigStore
from ai_chat.provider_registry import ProviderRegistry
from ai_chat.providers.base import ChatCompletionRequest, ChatCompletionResponse, ChatProvider
from ai_chat.providers.factory import VENDOR_DEFAULTS, create_provider
from ai_chat.schemas import Character, ModelEntry

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, str, str, str], ChatProvider]


def _default_factory(http_client: httpx.Client | None) -> ProviderFactory:
    def factory(name: str, endpoint: str, api_key: str, model: str) -> ChatProvider:
        return create_provider(name, endpoint, api_key, model, http_client=http_client)

    return factory


class AIService:
    """Owns the provider registry and the catalog caches for one process."""

    def __init__(
        self,
        registry: ProviderRegistry,
        cipher: CredentialCipher,
        provider_store: ProviderConfigStore,
        character_store: CharacterStore,
        *,
        environ: Mapping[str, str] | None = None,
        provider_factory: ProviderFactory | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._registry = registry
        self._cipher = cipher
        self._provider_store = provider_store
        self._character_store = character_store
        self._environ = environ
        self._provider_factory = provider_factory or _default_factory(http_client)
        self._model_cache: ReadThroughCache[tuple[ModelEntry, ...]] = ReadThroughCache("models")
        self._character_cache: ReadThroughCache[tuple[Character, ...]] = ReadThroughCache(
            "characters"
        )

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def load_from_store(self) -> int:
        """Register active providers from the persisted configuration rows."""
        try:
            rows = self._provider_store.list_active_providers()
        except Exception:
            logger.exception("Failed to load AI providers from the configuration store")
            return 0

        loaded = 0
        for row in rows:
            api_key = self._cipher.decrypt_or_passthrough(
                row.encrypted_api_key, label=f"provider:{row.name}"
            )
            if not api_key:
                logger.warning(
                    "AI provider has no API key configured; skipping",
                    extra={"provider": row.name},
                )
                continue
            try:
                provider = self._provider_factory(row.name, row.endpoint, api_key, row.model_name)
            except UnknownProviderError:
                logger.warning("Unknown AI provider type; skipping", extra={"provider": row.name})
                continue
            self._registry.register(row.name, provider)
            loaded += 1

        logger.info("Loaded AI providers from the configuration store", extra={"count": loaded})
        return loaded

    def load_from_env(self) -> int:
        """Register single-vendor providers from {VENDOR}_API_KEY/_API_URL/_MODEL variables."""
        environ = os.environ if self._environ is None else self._environ
        loaded = 0
        for name in PROVIDER_NAMES:
            defaults = VENDOR_DEFAULTS[name]
            api_key = environ.get(f"{defaults.env_prefix}_API_KEY", "")
            if not api_key:
                continue
            endpoint = environ.get(f"{defaults.env_prefix}_API_URL") or defaults.endpoint
            model = environ.get(f"{defaults.env_prefix}_MODEL") or defaults.model
            self._registry.register(name, self._provider_factory(name, endpoint, api_key, model))
            loaded += 1

        logger.info("Loaded AI providers from the environment", extra={"count": loaded})
        return loaded

    def bootstrap(self) -> list[str]:
        if self.load_from_store() == 0:
            self.load_from_env()
        return sorted(self._registry.list_names())

    def reload(self) -> list[str]:
        """Replace every provider from the authoritative sources and drop the model catalog."""
        self._registry.clear()
        names = self.bootstrap()
        self._model_cache.invalidate()
        logger.info("Reloaded AI providers", extra={"providers": names})
        return names

    def dispatch(
        self,
        provider_name: str,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionResponse:
        return self._registry.dispatch(provider_name, request, timeout=timeout)

    def has_provider(self, name: str) -> bool:
        return self._registry.has(name)

    def get_model_catalog(self) -> tuple[ModelEntry, ...]:
        return self._model_cache.get_or_refresh(self._load_model_catalog)

    def get_character_catalog(self) -> tuple[Character, ...]:
        return self._character_cache.get_or_refresh(self._load_character_catalog)

    def invalidate_catalogs(self) -> None:
        self._model_cache.invalidate()
        self._character_cache.invalidate()

    def _load_character_catalog(self) -> tuple[Character, ...]:
        try:
            return tuple(self._character_store.list_active_characters())
        except Exception as e:
            logger.exception("Failed to load AI characters from the character store")
            raise ConfigurationError("AI characters are unavailable") from e

    def _load_model_catalog(self) -> tuple[ModelEntry, ...]:
        try:
            rows = self._provider_store.list_active_providers()
        except Exception:
            logger.exception("Failed to load the model catalog; listing registered providers")
            rows = []
        if rows:
            return tuple(
                ModelEntry(name=row.name, model=row.model_name, display_name=row.display_name)
                for row in rows
            )

        entries = []
        for name in sorted(self._registry.list_names()):
            try:
                provider = self._registry.resolve(name)
            except ConfigurationError:
                # Removed by a concurrent reload.
                continue
            model = provider.model_name()
            entries.append(ModelEntry(name=name, model=model, display_name=f"{name} - {model}"))
        return tuple(entries)
