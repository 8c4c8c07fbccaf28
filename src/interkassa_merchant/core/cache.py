"""
Cache capability consumed by the API client and the account resolver.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

__all__ = [
    "ACCOUNT_ID_KEY",
    "CACHE_TTL_SECONDS",
    "CURRENCY_KEY",
    "CacheBackend",
    "INPUT_PAYWAYS_KEY",
    "InMemoryCache",
    "OUTPUT_PAYWAYS_KEY",
    "read_through",
]

CURRENCY_KEY = "interkassa.currency"
INPUT_PAYWAYS_KEY = "interkassa.input_payways"
OUTPUT_PAYWAYS_KEY = "interkassa.output_payways"
ACCOUNT_ID_KEY = "interkassa.lk_api_account_id"

CACHE_TTL_SECONDS = 86400


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl: int) -> None:
        ...


class InMemoryCache:
    """Process-local cache with per-entry expiry."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()


def read_through(
    cache: CacheBackend,
    key: str,
    fetch: Callable[[], Any],
    ttl: int = CACHE_TTL_SECONDS,
) -> Any:
    """
    Return the cached value for ``key`` or fetch, store and return it.

    A hit is returned as-is. Read and write are separate steps, so concurrent
    misses may both fetch; the last write wins.
    """
    cached = cache.get(key)
    if cached is not None:
        logging.debug("Cache hit for %s", key)
        return cached

    logging.info("Cache miss for %s, fetching from gateway", key)
    value = fetch()
    cache.set(key, value, ttl)
    return value
