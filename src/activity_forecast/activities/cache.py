"""Time-to-live cache for forecast and geocoding results."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable, Optional, TypeVar

from cachetools import TTLCache

from activity_forecast.config import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the time it was stored."""
    value: Any
    stored_at: float


class ForecastCache:
    """Bounded key/value cache whose entries expire after a fixed TTL.

    An entry is fresh while ``now - stored_at < ttl``. Expired entries are
    dropped on access and, once ``max_entries`` is reached, the least
    recently used entry is evicted to make room.

    There is no locking. Two callers missing on the same key may both run
    their compute function; the later result replaces the earlier one.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        max_entries: int = CACHE_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic
    ):
        """Initialize the cache.

        Args:
            ttl: Seconds an entry stays fresh
            max_entries: Maximum number of stored entries
            timer: Clock returning seconds; injectable for tests
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")

        self.ttl = ttl
        self.max_entries = max_entries
        self._timer = timer
        self._entries: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl, timer=timer)

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self._lookup(key) is not None

    def _lookup(self, key: Hashable) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is not None:
            logger.debug(f"Cache hit for '{key}'")
        else:
            logger.debug(f"Cache miss for '{key}'")
        return entry

    def _store(self, key: Hashable, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._timer())

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the fresh value for key, computing and storing it if needed.

        Args:
            key: Cache key
            compute: Zero-argument function producing the value

        Returns:
            The cached or freshly computed value

        Raises:
            Exception: Whatever compute raises; nothing is stored in that case
        """
        entry = self._lookup(key)
        if entry is not None:
            return entry.value

        value = compute()
        self._store(key, value)
        return value

    async def aget_or_compute(self, key: Hashable, compute: Callable[[], Awaitable[T]]) -> T:
        """Async variant of get_or_compute for coroutine-producing compute functions."""
        entry = self._lookup(key)
        if entry is not None:
            return entry.value

        value = await compute()
        self._store(key, value)
        return value

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
