"""
Full-URL response cache for GET handlers.

Responses are kept in process memory, so a cache lives as long as the warm
Lambda container that holds it. Entries are keyed by request URL only; the
Accept header is not part of the key, matching the edge cache in front of
the gateway.
"""

from __future__ import annotations

import copy
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache, wraps
from http import HTTPStatus
from threading import Lock
from typing import Any, Protocol

from aws_lambda_powertools import Logger

from core.config import GatewayConfig
from core.utils.constants import CACHE_MAX_AGE_SECONDS
from core.utils.request import request_url

logger = Logger(UTC=True)

JsonDict = dict[str, Any]


class ResponseCache(Protocol):
    """Get-or-store cache of API Gateway responses keyed by URL."""

    name: str

    def get(self, url: str) -> JsonDict | None: ...

    def put(self, url: str, response: JsonDict) -> None: ...

    def clear(self) -> None: ...


@dataclass
class CacheEntry:
    response: JsonDict
    stored_at: float
    ttl: float

    @property
    def is_expired(self) -> bool:
        return time.monotonic() - self.stored_at >= self.ttl


class InMemoryResponseCache:
    """
    Thread-safe LRU cache with TTL expiry.

    Features:
    - Lock around every operation
    - TTL-based expiration (defaults to the public max-age)
    - LRU eviction when max entries exceeded
    """

    def __init__(
        self,
        *,
        name: str,
        max_entries: int,
        ttl_seconds: float = CACHE_MAX_AGE_SECONDS,
    ) -> None:
        self.name = name
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, url: str) -> JsonDict | None:
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None

            if entry.is_expired:
                del self._entries[url]
                return None

            self._entries.move_to_end(url)
            return copy.deepcopy(entry.response)

    def put(self, url: str, response: JsonDict) -> None:
        if self._max_entries <= 0:
            return

        with self._lock:
            self._entries[url] = CacheEntry(
                response=copy.deepcopy(response),
                stored_at=time.monotonic(),
                ttl=self._ttl,
            )
            self._entries.move_to_end(url)

            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached response", extra={"cache": self.name, "url": evicted})

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


@lru_cache(maxsize=1)
def _shared_cache(name: str, max_entries: int) -> InMemoryResponseCache:
    return InMemoryResponseCache(name=name, max_entries=max_entries)


def response_cache_for(config: GatewayConfig) -> ResponseCache | None:
    """Return the container-wide cache described by config, or None if disabled."""
    if config.response_cache_max_entries <= 0:
        return None

    return _shared_cache(config.response_cache_name, config.response_cache_max_entries)


def is_cacheable(response: JsonDict) -> bool:
    """Only successful responses explicitly marked public are stored."""
    if response.get("statusCode") != HTTPStatus.OK.value:
        return False

    cache_control = (response.get("headers") or {}).get("Cache-Control", "")
    return "public" in cache_control


def cached_response(
    cache_provider: Callable[[], ResponseCache | None],
) -> Callable[[Callable[..., JsonDict]], Callable[..., JsonDict]]:
    """
    Wrap a GET handler with a get-or-compute response cache.

    ``cache_provider`` is called on every request so the cache can be
    created lazily from configuration; returning None bypasses caching.
    """

    def decorator(func: Callable[..., JsonDict]) -> Callable[..., JsonDict]:
        @wraps(func)
        def wrapper(event: JsonDict, context: Any) -> JsonDict:
            cache = cache_provider() if event.get("httpMethod", "GET") == "GET" else None
            if cache is None:
                return func(event, context)

            url = request_url(event)
            cached = cache.get(url)
            if cached is not None:
                logger.info("Response cache hit", extra={"cache": cache.name, "url": url})
                return cached

            response = func(event, context)

            if is_cacheable(response):
                cache.put(url, response)

            return response

        return wrapper

    return decorator
