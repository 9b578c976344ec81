"""Time- and size-bounded cache for AI quote and trivia lookups."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from ..models import ExtraKind
from .openrouter import ContentUnavailableError

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "AI is taking a nap. Try again later."
EMPTY_TEXT = "Could not retrieve info."

CacheKey = tuple[str, str, str]


class ContentProvider(Protocol):
    async def fetch_content(self, title: str, year: str, kind: ExtraKind) -> str:
        ...


@dataclass(slots=True)
class _CacheEntry:
    value: str
    inserted_at: float


class ExtraContentCache:
    """Serve quote/trivia text while keeping provider calls to a minimum.

    Entries live for ``ttl_seconds``; an expired entry is treated as missing
    even before it is swept. Every successful write triggers a maintenance
    pass that keeps the cache at or below ``capacity`` by dropping expired
    entries first and then the oldest insertions.

    Failed lookups are never cached so the next call retries the provider.
    Concurrent lookups for the same key are not coalesced; callers guard
    against overlapping requests for the same movie.
    """

    def __init__(
        self,
        provider: ContentProvider,
        *,
        ttl_seconds: float = 300.0,
        capacity: int = 50,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("Cache TTL must be positive")
        self._provider = provider
        self._ttl = float(ttl_seconds)
        self._capacity = capacity
        self._clock = clock
        self._entries: dict[CacheKey, _CacheEntry] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @staticmethod
    def make_key(title: str, year: str, kind: ExtraKind) -> CacheKey:
        return (title, year, kind)

    async def fetch(self, title: str, year: str, kind: ExtraKind) -> str:
        """Return cached text for the movie, asking the provider on a miss."""

        key = self.make_key(title, year, kind)
        cached = self._lookup(key)
        if cached is not None:
            return cached

        try:
            text = await self._provider.fetch_content(title, year, kind)
        except ContentUnavailableError as exc:
            logger.warning(
                "Falling back for %s of %s (%s): %s", kind, title, year, exc
            )
            return FALLBACK_TEXT

        value = (text or "").strip() or EMPTY_TEXT
        self._store(key, value)
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple):
            return False
        return self._lookup(key) is not None  # type: ignore[arg-type]

    def _lookup(self, key: CacheKey) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at >= self._ttl:
            return None
        return entry.value

    def _store(self, key: CacheKey, value: str) -> None:
        # Re-inserting moves a refreshed key to the back of the eviction order.
        self._entries.pop(key, None)
        self._entries[key] = _CacheEntry(value=value, inserted_at=self._clock())
        self._maintain()

    def _maintain(self) -> None:
        if len(self._entries) <= self._capacity:
            return

        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.inserted_at > self._ttl
        ]
        for key in expired:
            del self._entries[key]

        overflow = len(self._entries) - self._capacity
        if overflow > 0:
            for key in list(self._entries)[:overflow]:
                del self._entries[key]
            logger.debug("Evicted %s extra content entries", overflow)
