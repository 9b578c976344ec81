"""Selection controller driving genre shuffles, mood picks and extras."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Protocol

from ..catalog import StaticCatalog
from ..config import Settings
from ..models import (
    AI_PICK_LABEL,
    EXTRA_KINDS,
    ExtraContent,
    ExtraKind,
    Movie,
    SelectionPhase,
    SelectionSnapshot,
)
from .extras_cache import ExtraContentCache
from .openrouter import RecommendationUnavailableError
from .reveal import RevealSequence, SleepFunc

logger = logging.getLogger(__name__)

Listener = Callable[[SelectionSnapshot], None]


class Recommender(Protocol):
    async def recommend(self, mood: str) -> Movie:
        ...


class NoCandidatesError(LookupError):
    """Raised when a genre has no movies to pick from."""

    def __init__(self, genre: str) -> None:
        super().__init__(f"No movies available for genre {genre!r}")
        self.genre = genre


class SelectionController:
    """Owns the single active selection and its idle/animating/settled lifecycle.

    Genre picks decide the final movie up front and then run a reveal
    sequence; mood picks ask the recommender and settle directly. Every
    state change is pushed to subscribed listeners as a fresh snapshot.

    Asynchronous results carry a request token. Starting a new pick or
    resetting bumps the token, so replies that arrive late are dropped
    instead of overwriting newer state.
    """

    def __init__(
        self,
        settings: Settings,
        catalog: StaticCatalog,
        recommender: Recommender,
        extras: ExtraContentCache,
        *,
        rng: random.Random | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._catalog = catalog
        self._recommender = recommender
        self._extras = extras
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._listeners: list[Listener] = []

        self._phase = SelectionPhase.IDLE
        self._active_genre: str | None = None
        self._displayed: Movie | None = None
        self._final: Movie | None = None
        self._extra: ExtraContent | None = None
        self._sequence: RevealSequence | None = None

        self._token = 0
        self._mood_token: int | None = None
        self._extra_token: int | None = None
        self._extra_kind: ExtraKind | None = None

    @property
    def phase(self) -> SelectionPhase:
        return self._phase

    @property
    def sequence(self) -> RevealSequence | None:
        """The live (or most recent) reveal sequence, if any."""

        return self._sequence

    @property
    def mood_pending(self) -> bool:
        return self._mood_token is not None

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(
            phase=self._phase,
            active_genre=self._active_genre,
            displayed_movie=self._displayed,
            final_movie=self._final if self._phase is SelectionPhase.SETTLED else None,
            mood_pending=self.mood_pending,
            extra_pending=self._extra_kind,
            extra=self._extra,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a snapshot listener and return a function removing it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def pick_from_genre(self, genre: str) -> RevealSequence:
        """Decide a movie for the genre and start the shuffle animation."""

        self._cancel_sequence()
        self._next_token()
        self._mood_token = None
        self._clear_extra()

        candidates = self._catalog.candidates_for(genre)
        if not candidates:
            self._phase = SelectionPhase.IDLE
            self._active_genre = None
            self._displayed = None
            self._final = None
            self._notify()
            raise NoCandidatesError(genre)

        name = self._catalog.resolve(genre) or genre
        final = self._rng.choice(candidates)
        self._active_genre = name
        self._displayed = None
        self._final = final
        self._phase = SelectionPhase.ANIMATING

        sequence = RevealSequence(
            candidates,
            final,
            steps=self._settings.reveal_steps,
            interval=self._settings.reveal_interval_seconds,
            rng=self._rng,
            on_tick=self._on_tick,
            on_settle=self._on_settle,
            sleep=self._sleep,
        )
        self._sequence = sequence
        logger.info("Shuffling %s candidates for %s", len(candidates), name)
        self._notify()
        return sequence.start()

    async def pick_from_mood(self, mood: str) -> Movie | None:
        """Ask the recommender for a movie matching the mood.

        Returns ``None`` without calling the recommender when the mood is blank
        or when another mood pick is still outstanding. Raises
        ``RecommendationUnavailableError`` when the recommender fails; the
        current selection is left untouched in that case. Replies and failures
        for a request superseded by a newer pick or reset return ``None``.
        """

        cleaned = (mood or "").strip()
        if not cleaned:
            return None
        if self.mood_pending:
            logger.debug("Ignoring mood pick while another is pending")
            return None

        token = self._next_token()
        self._mood_token = token
        self._notify()
        try:
            movie = await self._recommender.recommend(cleaned)
        except RecommendationUnavailableError as exc:
            self._finish_mood(token)
            if token != self._token:
                logger.debug("Discarding stale mood failure: %s", exc)
                return None
            raise
        except Exception as exc:
            self._finish_mood(token)
            if token != self._token:
                logger.debug("Discarding stale mood failure: %s", exc)
                return None
            raise RecommendationUnavailableError(str(exc)) from exc

        if token != self._token:
            self._finish_mood(token)
            logger.debug("Discarding stale mood recommendation %s", movie.title)
            return None

        self._mood_token = None
        self._cancel_sequence()
        self._clear_extra()
        self._active_genre = AI_PICK_LABEL
        self._displayed = movie
        self._final = movie
        self._phase = SelectionPhase.SETTLED
        logger.info("AI picked %s (%s)", movie.title, movie.year)
        self._notify()
        return movie

    def replay(self) -> RevealSequence | None:
        """Shuffle the active genre again, if a shuffle is allowed right now."""

        if self._phase is SelectionPhase.ANIMATING or self.mood_pending:
            return None
        genre = self._active_genre
        if not genre or genre == AI_PICK_LABEL:
            return None
        return self.pick_from_genre(genre)

    def reset(self) -> None:
        self._cancel_sequence()
        self._next_token()
        self._phase = SelectionPhase.IDLE
        self._active_genre = None
        self._displayed = None
        self._final = None
        self._mood_token = None
        self._clear_extra()
        self._notify()

    async def fetch_extra(self, kind: ExtraKind) -> ExtraContent | None:
        """Unlock a quote or trivia fact for the settled movie.

        Returns ``None`` when nothing is settled, when a lookup is already in
        flight, or when the displayed movie changed before the reply arrived.
        """

        if kind not in EXTRA_KINDS:
            raise ValueError(f"Unsupported extra kind: {kind}")
        movie = self._displayed
        if self._phase is not SelectionPhase.SETTLED or movie is None:
            return None
        if self._extra_kind is not None:
            logger.debug("Ignoring %s request while %s is loading", kind, self._extra_kind)
            return None

        token = self._token
        self._extra_token = token
        self._extra_kind = kind
        self._extra = None
        self._notify()
        try:
            text = await self._extras.fetch(movie.title, movie.year, kind)
        except Exception:
            if self._extra_token == token:
                self._clear_extra()
                self._notify()
            raise

        if self._extra_token != token or self._displayed is not movie:
            logger.debug("Discarding stale %s for %s", kind, movie.title)
            return None

        extra = ExtraContent(kind=kind, text=text)
        self._extra_token = None
        self._extra_kind = None
        self._extra = extra
        self._notify()
        return extra

    def _on_tick(self, movie: Movie) -> None:
        self._displayed = movie
        self._notify()

    def _on_settle(self, movie: Movie) -> None:
        self._displayed = movie
        self._phase = SelectionPhase.SETTLED
        logger.info("Settled on %s (%s)", movie.title, movie.year)
        self._notify()

    def _finish_mood(self, token: int) -> None:
        if self._mood_token == token:
            self._mood_token = None
            self._notify()

    def _cancel_sequence(self) -> None:
        if self._sequence is not None:
            self._sequence.cancel()

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def _clear_extra(self) -> None:
        self._extra = None
        self._extra_token = None
        self._extra_kind = None

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
