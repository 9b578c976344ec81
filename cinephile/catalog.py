"""Static genre lanes and the candidate movies behind each of them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .models import Movie
from .utils import slugify


@dataclass(frozen=True)
class Genre:
    """Describes a genre tile shown on the home screen."""

    name: str
    desc: str
    emoji: str
    gradient: str

    @property
    def slug(self) -> str:
        return slugify(self.name)


GENRES: tuple[Genre, ...] = (
    Genre(
        name="Feel Good",
        desc="Warm, funny and hopeful stories that leave you smiling.",
        emoji="🌈",
        gradient="from-amber-400 to-rose-400",
    ),
    Genre(
        name="Masala Action",
        desc="Larger-than-life heroes, whistle-worthy entries and big set pieces.",
        emoji="🔥",
        gradient="from-orange-500 to-red-600",
    ),
    Genre(
        name="Romance",
        desc="Love stories from train platforms to mustard fields.",
        emoji="💞",
        gradient="from-pink-400 to-fuchsia-500",
    ),
    Genre(
        name="Mind Benders",
        desc="Twisty thrillers that keep you guessing until the last frame.",
        emoji="🧠",
        gradient="from-indigo-500 to-cyan-400",
    ),
    Genre(
        name="Comedy",
        desc="Cult laughs and dialogues the internet still quotes.",
        emoji="😂",
        gradient="from-lime-400 to-emerald-500",
    ),
    Genre(
        name="Drama",
        desc="Powerful performances and stories that stay with you.",
        emoji="🎭",
        gradient="from-violet-500 to-purple-700",
    ),
    Genre(
        name="Horror",
        desc="Folk tales and haunted havelis best watched with the lights on.",
        emoji="👻",
        gradient="from-slate-600 to-gray-900",
    ),
    Genre(
        name="Sports",
        desc="Underdogs, coaches and the long road to the final whistle.",
        emoji="🏏",
        gradient="from-sky-400 to-blue-600",
    ),
)


MOVIE_DATABASE: dict[str, tuple[Movie, ...]] = {
    "Feel Good": (
        Movie(title="3 Idiots", year="2009", emoji="🎓", desc="Three engineering students question a system obsessed with marks."),
        Movie(title="Zindagi Na Milegi Dobara", year="2011", emoji="🚗", desc="A bachelor road trip across Spain turns into a lesson in living."),
        Movie(title="Queen", year="2013", emoji="👑", desc="Jilted days before her wedding, Rani takes her honeymoon alone."),
        Movie(title="Premam", year="2015", emoji="🦋", desc="One man's three loves across school, college and adulthood."),
        Movie(title="Chhichhore", year="2019", emoji="🏆", desc="College friends reunite to help a son understand failure."),
    ),
    "Masala Action": (
        Movie(title="Sholay", year="1975", emoji="🤠", desc="Two small-time crooks are hired to capture the bandit Gabbar Singh."),
        Movie(title="Baahubali: The Beginning", year="2015", emoji="⚔️", desc="A young man climbs a waterfall and discovers his royal destiny."),
        Movie(title="KGF: Chapter 1", year="2018", emoji="⛏️", desc="Rocky rises from the streets of Bombay to the gold fields of Kolar."),
        Movie(title="RRR", year="2022", emoji="🔥", desc="Two revolutionaries forge a friendship against the British Raj."),
        Movie(title="Vikram", year="2022", emoji="🕶️", desc="A black-ops squad hunts masked killers tied to a drug syndicate."),
    ),
    "Romance": (
        Movie(title="Dilwale Dulhania Le Jayenge", year="1995", emoji="🚆", desc="Raj follows Simran to Punjab to win over her traditional father."),
        Movie(title="Jab We Met", year="2007", emoji="🚂", desc="A chatty girl on a train changes a heartbroken businessman's life."),
        Movie(title="Vinnaithaandi Varuvaayaa", year="2010", emoji="🎬", desc="An aspiring filmmaker falls for the girl who lives upstairs."),
        Movie(title="Geethanjali", year="1989", emoji="🌧️", desc="Two terminally ill strangers find love in the hills of Ooty."),
        Movie(title="Sita Ramam", year="2022", emoji="✉️", desc="A soldier's letters from an unknown wife lead to a decades-old love."),
    ),
    "Mind Benders": (
        Movie(title="Drishyam", year="2013", emoji="🎞️", desc="A cable operator protects his family with an alibi built from movies."),
        Movie(title="Andhadhun", year="2018", emoji="🎹", desc="A 'blind' pianist walks into a murder he was never meant to see."),
        Movie(title="Kahaani", year="2012", emoji="🕵️", desc="A pregnant woman searches Kolkata for her missing husband."),
        Movie(title="Ratsasan", year="2018", emoji="🔪", desc="An aspiring director turned cop hunts a serial killer of schoolgirls."),
        Movie(title="Talaash", year="2012", emoji="🌙", desc="A grieving cop's late-night investigation blurs into the supernatural."),
    ),
    "Comedy": (
        Movie(title="Andaz Apna Apna", year="1994", emoji="🤡", desc="Two slackers compete for an heiress and stumble into a kidnapping."),
        Movie(title="Hera Pheri", year="2000", emoji="📞", desc="Three broke men answer a wrong-number ransom call."),
        Movie(title="Munna Bhai M.B.B.S.", year="2003", emoji="🩺", desc="A gangster enrols in medical college to please his father."),
        Movie(title="Panchavadi Palam", year="1984", emoji="🌉", desc="A village council demolishes a perfectly good bridge for a new one."),
        Movie(title="Delhi Belly", year="2011", emoji="🍗", desc="Three roommates get tangled up with a gangster's smuggled diamonds."),
    ),
    "Drama": (
        Movie(title="Mother India", year="1957", emoji="🌾", desc="A poor villager raises her sons against debt, floods and a moneylender."),
        Movie(title="Pather Panchali", year="1955", emoji="🌿", desc="Childhood in a Bengali village through the eyes of young Apu."),
        Movie(title="Nayakan", year="1987", emoji="🎩", desc="The rise of a Bombay slum boy into a feared and beloved don."),
        Movie(title="Kumbalangi Nights", year="2019", emoji="🐟", desc="Four estranged brothers on a Kerala backwater learn to be a family."),
        Movie(title="Taare Zameen Par", year="2007", emoji="🎨", desc="An art teacher sees what everyone missed in a struggling child."),
    ),
    "Horror": (
        Movie(title="Tumbbad", year="2018", emoji="🏚️", desc="Generations chase a cursed treasure hidden in a goddess's womb."),
        Movie(title="Stree", year="2018", emoji="👣", desc="A small town is haunted by a spirit that abducts men at night."),
        Movie(title="Manichitrathazhu", year="1993", emoji="🪔", desc="A couple moves into an ancestral mansion with a locked room."),
        Movie(title="Bhool Bhulaiyaa", year="2007", emoji="🗝️", desc="A psychiatrist investigates strange events in a royal palace."),
        Movie(title="Bulbbul", year="2020", emoji="🌕", desc="A child bride grows into the mistress of a haunted estate."),
    ),
    "Sports": (
        Movie(title="Lagaan", year="2001", emoji="🏏", desc="Villagers bet their taxes on a cricket match against the British."),
        Movie(title="Chak De! India", year="2007", emoji="🏑", desc="A disgraced coach leads the women's hockey team to redemption."),
        Movie(title="Dangal", year="2016", emoji="🤼", desc="A former wrestler trains his daughters for international glory."),
        Movie(title="Bhaag Milkha Bhaag", year="2013", emoji="🏃", desc="The life of the Flying Sikh, from Partition to the Olympic track."),
        Movie(title="Sarpatta Parambarai", year="2021", emoji="🥊", desc="Boxing clans of 1970s Madras settle scores in the ring."),
    ),
}


class StaticCatalog:
    """Read-only catalog of genres and their candidate movies."""

    def __init__(
        self,
        genres: tuple[Genre, ...] = GENRES,
        movies: Mapping[str, tuple[Movie, ...]] | None = None,
    ) -> None:
        self._genres = tuple(genres)
        self._movies = dict(MOVIE_DATABASE if movies is None else movies)
        self._slug_index = {slugify(name): name for name in self._movies}

    def list_genres(self) -> tuple[Genre, ...]:
        """Return the genres in display order."""

        return self._genres

    def resolve(self, key: str) -> str | None:
        """Map a genre name or slug onto its canonical name."""

        cleaned = (key or "").strip()
        if not cleaned:
            return None
        if cleaned in self._movies:
            return cleaned
        return self._slug_index.get(slugify(cleaned))

    def candidates_for(self, key: str) -> tuple[Movie, ...]:
        """Return candidate movies for a genre; unknown keys yield nothing."""

        name = self.resolve(key)
        if name is None:
            return ()
        return tuple(self._movies.get(name, ()))

    def has_genre(self, key: str) -> bool:
        return self.resolve(key) is not None
