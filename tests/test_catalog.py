"""Static catalog behaviour tests."""

from __future__ import annotations

from cinephile.catalog import GENRES, MOVIE_DATABASE, StaticCatalog
from cinephile.models import Movie


def test_every_genre_has_unique_candidates() -> None:
    """Each genre tile is backed by at least one movie and no duplicate titles."""

    catalog = StaticCatalog()

    for genre in catalog.list_genres():
        candidates = catalog.candidates_for(genre.name)
        titles = [movie.title for movie in candidates]
        assert candidates, genre.name
        assert len(titles) == len(set(titles)), genre.name


def test_genres_and_database_share_keys() -> None:
    assert [genre.name for genre in GENRES] == list(MOVIE_DATABASE)


def test_unknown_genre_yields_no_candidates() -> None:
    catalog = StaticCatalog()

    assert catalog.candidates_for("Space Westerns") == ()
    assert catalog.candidates_for("") == ()
    assert catalog.resolve("Space Westerns") is None


def test_genre_resolves_by_slug() -> None:
    catalog = StaticCatalog()

    assert catalog.resolve("feel-good") == "Feel Good"
    assert catalog.candidates_for("masala-action") == MOVIE_DATABASE["Masala Action"]


def test_custom_movies_override_database() -> None:
    movie = Movie(title="Sholay", year="1975", desc="Classic", emoji="🤠")
    catalog = StaticCatalog(movies={"Classics": (movie,), "Empty": ()})

    assert catalog.candidates_for("Classics") == (movie,)
    assert catalog.candidates_for("Empty") == ()
    assert catalog.has_genre("Empty") is True
