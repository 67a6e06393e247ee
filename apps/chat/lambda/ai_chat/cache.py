"""Short-TTL read-through cache for catalog lookups."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .constants import CATALOG_CACHE_TTL_SECONDS
from .infra.locks import ReadWriteLock

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    payload: T
    captured_at: float


class ReadThroughCache(Generic[T]):
    """Caches one snapshot at a time and refreshes it from the backing store once stale.

    Concurrent misses may each call ``refresh``; the last snapshot written wins.
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: float = CATALOG_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._name = name
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entry: CacheEntry[T] | None = None

    @property
    def name(self) -> str:
        return self._name

    def get_or_refresh(self, refresh: Callable[[], T]) -> T:
        with self._lock.read_locked():
            entry = self._entry
            if entry is not None and self._clock() - entry.captured_at < self._ttl_seconds:
                return entry.payload

        payload = refresh()
        with self._lock.write_locked():
            self._entry = CacheEntry(payload=payload, captured_at=self._clock())
        logger.debug("Cache refreshed", extra={"cache": self._name})
        return payload

    def invalidate(self) -> None:
        with self._lock.write_locked():
            self._entry = None
        logger.info("Cache invalidated", extra={"cache": self._name})
