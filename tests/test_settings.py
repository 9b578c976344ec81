"""Configuration settings behaviour tests."""

from __future__ import annotations

import pytest

from cinephile.config import DEFAULT_FALLBACK_GENRE, Settings


def test_defaults_match_reveal_cadence() -> None:
    """Out of the box the shuffle runs twelve ticks at 80ms."""

    settings = Settings(_env_file=None)

    assert settings.reveal_steps == 12
    assert settings.reveal_interval_ms == 80
    assert settings.reveal_interval_seconds == pytest.approx(0.08)
    assert settings.extra_cache_ttl_seconds == 300
    assert settings.extra_cache_capacity == 50


def test_fallback_genre_accepts_slug() -> None:
    """Fallback genres may be configured by slug and resolve to the display name."""

    settings = Settings(_env_file=None, FALLBACK_GENRE="masala-action")

    assert settings.fallback_genre == "Masala Action"


def test_fallback_genre_blank_defaults() -> None:
    settings = Settings(_env_file=None, FALLBACK_GENRE="  ")

    assert settings.fallback_genre == DEFAULT_FALLBACK_GENRE


def test_fallback_genre_unknown_raises() -> None:
    with pytest.raises(ValueError, match="Unknown fallback genre configured"):
        Settings(_env_file=None, FALLBACK_GENRE="space-westerns")


def test_reveal_steps_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, REVEAL_STEPS=0)
