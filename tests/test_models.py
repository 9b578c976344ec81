from __future__ import annotations

import pytest

from cinephile.models import (
    AI_PICK_LABEL,
    ExtraContent,
    Movie,
    SelectionPhase,
    SelectionSnapshot,
)


def test_movie_from_ai_payload_coerces_year():
    movie = Movie.from_ai_payload(
        {
            "title": "  Andhadhun ",
            "year": 2018,
            "desc": "A blind pianist witnesses a murder.",
            "emoji": "🎹",
            "reason": "Twists keep you guessing.",
        }
    )

    assert movie.title == "Andhadhun"
    assert movie.year == "2018"
    assert movie.reason == "Twists keep you guessing."


def test_movie_from_ai_payload_requires_reason():
    with pytest.raises(ValueError, match="reason"):
        Movie.from_ai_payload(
            {"title": "Queen", "year": "2013", "desc": "Solo honeymoon.", "emoji": "👑"}
        )


def test_blurb_prefers_reason_over_desc():
    catalog_movie = Movie(title="Queen", year="2013", desc="Solo honeymoon.", emoji="👑")
    ai_movie = catalog_movie.model_copy(update={"reason": "You need a lift."})

    assert catalog_movie.blurb() == "Solo honeymoon."
    assert ai_movie.blurb() == "You need a lift."


def test_snapshot_response_hides_trailer_until_settled():
    movie = Movie(title="Lagaan", year="2001", desc="Cricket.", emoji="🏏")
    animating = SelectionSnapshot(
        phase=SelectionPhase.ANIMATING, active_genre="Sports", displayed_movie=movie
    )
    settled = SelectionSnapshot(
        phase=SelectionPhase.SETTLED,
        active_genre=AI_PICK_LABEL,
        displayed_movie=movie,
        final_movie=movie,
        extra=ExtraContent(kind="trivia", text="Shot in Bhuj."),
    )

    assert animating.to_response()["trailer_url"] is None
    payload = settled.to_response()
    assert payload["phase"] == "settled"
    assert payload["trailer_url"].endswith("Lagaan+2001+trailer")
    assert payload["is_ai_pick"] is True
    assert payload["extra"] == {"kind": "trivia", "text": "Shot in Bhuj."}
