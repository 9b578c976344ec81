"""Pydantic models describing movies and selection snapshots."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .utils import trailer_search_url

ExtraKind = Literal["quote", "trivia"]
EXTRA_KINDS: tuple[str, ...] = ("quote", "trivia")

AI_PICK_LABEL = "AI Pick"


class Movie(BaseModel):
    """A single movie shown on the result screen."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(min_length=1, validation_alias=AliasChoices("title", "name"))
    year: str
    desc: str = Field(validation_alias=AliasChoices("desc", "description"))
    emoji: str = "🎬"
    reason: str | None = None

    @field_validator("title", "desc", "emoji", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: object) -> object:
        # Models happily answer with 1975 instead of "1975".
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @classmethod
    def from_ai_payload(cls, data: dict[str, object]) -> "Movie":
        """Build a recommendation from a model reply, requiring every field."""

        missing = [
            name
            for name in ("title", "year", "desc", "emoji", "reason")
            if not str(data.get(name) or "").strip()
        ]
        if missing:
            raise ValueError(
                "Recommendation is missing fields: " + ", ".join(missing)
            )
        return cls.model_validate(
            {name: data[name] for name in ("title", "year", "desc", "emoji", "reason")}
        )

    def blurb(self) -> str:
        """Text shown under the title; an AI reason wins over the synopsis."""

        return self.reason or self.desc

    def trailer_url(self) -> str:
        return trailer_search_url(self.title, self.year)


class ExtraContent(BaseModel):
    """Unlocked quote or trivia for the displayed movie."""

    model_config = ConfigDict(frozen=True)

    kind: ExtraKind
    text: str


class SelectionPhase(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    SETTLED = "settled"


class SelectionSnapshot(BaseModel):
    """Read-only view of the controller state handed to the presentation."""

    model_config = ConfigDict(frozen=True)

    phase: SelectionPhase = SelectionPhase.IDLE
    active_genre: str | None = None
    displayed_movie: Movie | None = None
    final_movie: Movie | None = None
    mood_pending: bool = False
    extra_pending: ExtraKind | None = None
    extra: ExtraContent | None = None

    @property
    def is_animating(self) -> bool:
        return self.phase is SelectionPhase.ANIMATING

    def to_response(self) -> dict[str, object]:
        """Return the JSON payload consumed by the result page."""

        payload = self.model_dump(mode="json")
        movie = self.displayed_movie
        payload["blurb"] = movie.blurb() if movie else None
        payload["trailer_url"] = (
            movie.trailer_url()
            if movie is not None and self.phase is SelectionPhase.SETTLED
            else None
        )
        payload["is_ai_pick"] = self.active_genre == AI_PICK_LABEL
        return payload


class GenrePickRequest(BaseModel):
    genre: str = Field(min_length=1)


class MoodPickRequest(BaseModel):
    mood: str = Field(max_length=1_000)
