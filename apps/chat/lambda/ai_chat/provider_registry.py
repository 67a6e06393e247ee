"""Named provider registry with a default selection."""

import logging

from .errors import NoProvidersConfiguredError, ProviderNotFoundError
from .infra.locks import ReadWriteLock
from .providers.base import ChatCompletionRequest, ChatCompletionResponse, ChatProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Thread-safe mapping of provider name to adapter.

    The lock only guards name resolution and mutation; vendor calls run outside it.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._providers: dict[str, ChatProvider] = {}
        self._default_name = ""

    def register(self, name: str, provider: ChatProvider) -> None:
        with self._lock.write_locked():
            self._providers[name] = provider
            if not self._default_name:
                self._default_name = name
        logger.info(
            "Registered AI provider",
            extra={"provider": name, "model": provider.model_name()},
        )

    def set_default(self, name: str) -> None:
        with self._lock.write_locked():
            if name not in self._providers:
                raise ProviderNotFoundError(name)
            self._default_name = name
        logger.info("Default AI provider set", extra={"provider": name})

    @property
    def default_name(self) -> str:
        with self._lock.read_locked():
            return self._default_name

    def resolve(self, name: str = "") -> ChatProvider:
        with self._lock.read_locked():
            if not name:
                if not self._default_name:
                    raise NoProvidersConfiguredError()
                name = self._default_name
            provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    def list_names(self) -> frozenset[str]:
        with self._lock.read_locked():
            return frozenset(self._providers)

    def has(self, name: str) -> bool:
        with self._lock.read_locked():
            return name in self._providers

    def dispatch(
        self,
        name: str,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionResponse:
        provider = self.resolve(name)
        return provider.chat_completion(request, timeout=timeout)

    def clear(self) -> None:
        with self._lock.write_locked():
            self._providers = {}
            self._default_name = ""
        logger.info("Cleared AI providers")

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._providers)
