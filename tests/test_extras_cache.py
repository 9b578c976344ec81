"""Tests for the quote/trivia cache."""

from __future__ import annotations

import asyncio

import pytest

from cinephile.services.extras_cache import EMPTY_TEXT, FALLBACK_TEXT, ExtraContentCache
from cinephile.services.openrouter import ContentUnavailableError


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingProvider:
    """Content provider stub returning queued answers and recording calls."""

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, str, str]] = []

    async def fetch_content(self, title: str, year: str, kind: str) -> str:
        self.calls.append((title, year, kind))
        response = self.responses.pop(0) if self.responses else f"{kind} for {title}"
        if isinstance(response, Exception):
            raise response
        return response


@pytest.mark.anyio("asyncio")
async def test_repeat_fetch_within_window_uses_cache() -> None:
    provider = RecordingProvider("Fact X", "Fact Y")
    clock = FakeClock()
    cache = ExtraContentCache(provider, ttl_seconds=300, clock=clock)

    first = await cache.fetch("Sholay", "1975", "trivia")
    clock.advance(120)
    second = await cache.fetch("Sholay", "1975", "trivia")

    assert first == second == "Fact X"
    assert provider.calls == [("Sholay", "1975", "trivia")]


@pytest.mark.anyio("asyncio")
async def test_expired_entry_is_fetched_again() -> None:
    """An entry reaching the TTL counts as missing even before it is swept."""

    provider = RecordingProvider("Fact X", "Fact Y")
    clock = FakeClock()
    cache = ExtraContentCache(provider, ttl_seconds=300, clock=clock)

    assert await cache.fetch("Sholay", "1975", "trivia") == "Fact X"
    assert await cache.fetch("Sholay", "1975", "trivia") == "Fact X"
    clock.advance(300)
    assert await cache.fetch("Sholay", "1975", "trivia") == "Fact Y"
    assert len(provider.calls) == 2


@pytest.mark.anyio("asyncio")
async def test_provider_failure_returns_fallback_without_caching() -> None:
    provider = RecordingProvider(ContentUnavailableError("boom"), "Kitne aadmi the?")
    cache = ExtraContentCache(provider, clock=FakeClock())

    assert await cache.fetch("Sholay", "1975", "quote") == FALLBACK_TEXT
    assert len(cache) == 0
    assert await cache.fetch("Sholay", "1975", "quote") == "Kitne aadmi the?"
    assert len(provider.calls) == 2


@pytest.mark.anyio("asyncio")
async def test_quote_and_trivia_are_cached_independently() -> None:
    provider = RecordingProvider("Quote A", "Trivia A")
    cache = ExtraContentCache(provider, clock=FakeClock())

    assert await cache.fetch("Queen", "2013", "quote") == "Quote A"
    assert await cache.fetch("Queen", "2013", "trivia") == "Trivia A"
    assert await cache.fetch("Queen", "2013", "quote") == "Quote A"
    assert await cache.fetch("Queen", "2013", "trivia") == "Trivia A"
    assert len(provider.calls) == 2


@pytest.mark.anyio("asyncio")
async def test_empty_reply_is_replaced_with_placeholder() -> None:
    provider = RecordingProvider("   ")
    cache = ExtraContentCache(provider, clock=FakeClock())

    assert await cache.fetch("Stree", "2018", "trivia") == EMPTY_TEXT
    assert ("Stree", "2018", "trivia") in cache


def test_capacity_evicts_oldest_insertions_first() -> None:
    provider = RecordingProvider()
    clock = FakeClock()
    cache = ExtraContentCache(provider, ttl_seconds=300, capacity=3, clock=clock)
    titles = ["A", "B", "C", "D", "E"]

    async def runner() -> None:
        for title in titles:
            await cache.fetch(title, "2000", "quote")
            clock.advance(1)

    asyncio.run(runner())

    assert len(cache) == 3
    assert ("A", "2000", "quote") not in cache
    assert ("B", "2000", "quote") not in cache
    for title in ("C", "D", "E"):
        assert (title, "2000", "quote") in cache


def test_maintenance_sweeps_expired_entries_before_evicting() -> None:
    provider = RecordingProvider()
    clock = FakeClock()
    cache = ExtraContentCache(provider, ttl_seconds=300, capacity=3, clock=clock)

    async def runner() -> None:
        await cache.fetch("Old 1", "1990", "quote")
        await cache.fetch("Old 2", "1990", "quote")
        clock.advance(301)
        await cache.fetch("New 1", "2020", "quote")
        await cache.fetch("New 2", "2020", "quote")

    asyncio.run(runner())

    assert len(cache) == 2
    assert ("New 1", "2020", "quote") in cache
    assert ("New 2", "2020", "quote") in cache


def test_size_never_exceeds_capacity() -> None:
    provider = RecordingProvider()
    clock = FakeClock()
    cache = ExtraContentCache(provider, ttl_seconds=300, capacity=5, clock=clock)
    sizes: list[int] = []

    async def runner() -> None:
        for index in range(40):
            kind = "quote" if index % 2 else "trivia"
            await cache.fetch(f"Movie {index % 13}", "2001", kind)
            sizes.append(len(cache))
            clock.advance(17)

    asyncio.run(runner())

    assert max(sizes) <= 5


def test_invalid_configuration_is_rejected() -> None:
    with pytest.raises(ValueError):
        ExtraContentCache(RecordingProvider(), capacity=0)
    with pytest.raises(ValueError):
        ExtraContentCache(RecordingProvider(), ttl_seconds=0)
