"""Static mood/genre affinity table and tag vocabularies.

Everything here is authored data.  Genre names follow TMDB's movie genre
list so they can be matched against catalogue records and translated into
the numeric ids used for discovery queries.
"""

from __future__ import annotations

from typing import Iterable

from moodreco.models import Mood

# Most-affine genre first.  Only the first few entries are used for scoring.
MOOD_GENRES: dict[Mood, tuple[str, ...]] = {
    Mood.HAPPY: ("Comedy", "Animation", "Family", "Music"),
    Mood.SAD: ("Drama", "Romance", "Documentary"),
    Mood.EXCITED: ("Action", "Adventure", "Thriller", "Science Fiction"),
    Mood.CALM: ("Documentary", "Drama", "Romance", "Music"),
    Mood.ANXIOUS: ("Thriller", "Horror", "Mystery", "Crime"),
    Mood.ROMANTIC: ("Romance", "Comedy", "Drama", "Music"),
    Mood.NOSTALGIC: ("Drama", "History", "Western", "War"),
    Mood.ADVENTUROUS: ("Adventure", "Action", "Fantasy", "Science Fiction"),
    Mood.MYSTERIOUS: ("Mystery", "Thriller", "Crime", "Horror"),
    Mood.THOUGHTFUL: ("Drama", "Documentary", "History", "Science Fiction"),
    Mood.ENERGETIC: ("Action", "Adventure", "Science Fiction", "Thriller"),
    Mood.MELANCHOLIC: ("Drama", "Romance", "Music", "History"),
    Mood.OPTIMISTIC: ("Comedy", "Family", "Adventure", "Music"),
    Mood.CONTEMPLATIVE: ("Drama", "Documentary", "Science Fiction", "History"),
}

MOOD_TAGS: dict[Mood, tuple[str, ...]] = {
    Mood.HAPPY: ("joyful", "upbeat", "cheerful", "positive"),
    Mood.SAD: ("melancholy", "emotional", "tearjerker", "poignant"),
    Mood.EXCITED: ("thrilling", "energetic", "dynamic", "intense"),
    Mood.CALM: ("peaceful", "relaxing", "serene", "gentle"),
    Mood.ANXIOUS: ("tense", "suspenseful", "edge-of-seat", "nervous"),
    Mood.ROMANTIC: ("love", "heartwarming", "passionate", "intimate"),
    Mood.NOSTALGIC: ("vintage", "classic", "reminiscent", "timeless"),
    Mood.ADVENTUROUS: ("epic", "journey", "exploration", "quest"),
    Mood.MYSTERIOUS: ("enigmatic", "puzzle", "intrigue", "suspense"),
    Mood.THOUGHTFUL: ("philosophical", "deep", "contemplative", "meaningful"),
    Mood.ENERGETIC: ("fast-paced", "dynamic", "high-energy", "action-packed"),
    Mood.MELANCHOLIC: ("bittersweet", "wistful", "somber", "reflective"),
    Mood.OPTIMISTIC: ("hopeful", "inspiring", "uplifting", "motivational"),
    Mood.CONTEMPLATIVE: ("meditative", "introspective", "reflective", "profound"),
}

# Descriptive tags a movie inherits from each of its genres.
GENRE_TAGS: dict[str, tuple[str, ...]] = {
    "Action": ("energetic", "intense", "action-packed"),
    "Adventure": ("epic", "journey", "exploration"),
    "Animation": ("joyful", "colorful", "whimsical"),
    "Comedy": ("upbeat", "cheerful", "lighthearted"),
    "Crime": ("intense", "suspenseful", "dark"),
    "Documentary": ("meaningful", "informative", "deep"),
    "Drama": ("emotional", "poignant", "profound"),
    "Family": ("heartwarming", "wholesome", "positive"),
    "Fantasy": ("magical", "imaginative", "quest"),
    "History": ("classic", "timeless", "meaningful"),
    "Horror": ("scary", "tense", "suspenseful"),
    "Music": ("upbeat", "rhythmic", "uplifting"),
    "Mystery": ("suspense", "intrigue", "puzzle"),
    "Romance": ("love", "heartwarming", "passionate"),
    "Science Fiction": ("futuristic", "imaginative", "philosophical"),
    "TV Movie": ("casual", "gentle"),
    "Thriller": ("thrilling", "edge-of-seat", "tense"),
    "War": ("intense", "somber", "reminiscent"),
    "Western": ("vintage", "classic", "rugged"),
}

GENRE_IDS: dict[str, int] = {
    "Action": 28,
    "Adventure": 12,
    "Animation": 16,
    "Comedy": 35,
    "Crime": 80,
    "Documentary": 99,
    "Drama": 18,
    "Family": 10751,
    "Fantasy": 14,
    "History": 36,
    "Horror": 27,
    "Music": 10402,
    "Mystery": 9648,
    "Romance": 10749,
    "Science Fiction": 878,
    "TV Movie": 10770,
    "Thriller": 53,
    "War": 10752,
    "Western": 37,
}

GENRE_NAMES: dict[int, str] = {genre_id: name for name, genre_id in GENRE_IDS.items()}

# How deep into a mood's affinity list a genre still counts as a match.
AFFINITY_DEPTH = 3


def genres_for_mood(mood: Mood | str, limit: int | None = None) -> list[str]:
    """Return the first *limit* genres for *mood*.

    Args:
        mood: A :class:`Mood` or its label.
        limit: Maximum number of genres; ``None`` returns all of them.

    Returns:
        Genre names, most affine first.  Empty for unknown moods.
    """
    parsed = Mood.parse(mood)
    if parsed is None:
        return []
    genres = MOOD_GENRES.get(parsed, ())
    if limit is None:
        return list(genres)
    return list(genres[: max(0, limit)])


def genre_ids_for_mood(mood: Mood | str, limit: int | None = None) -> list[int]:
    """Like :func:`genres_for_mood` but returns TMDB genre ids."""
    return [
        GENRE_IDS[name]
        for name in genres_for_mood(mood, limit)
        if name in GENRE_IDS
    ]


def genre_overlap(
    genres: Iterable[str], mood: Mood | str, top_n: int = AFFINITY_DEPTH
) -> int:
    """Count how many of *genres* appear in *mood*'s first *top_n* genres.

    Matching is case-insensitive.  Unknown moods give 0.
    """
    affine = {g.lower() for g in genres_for_mood(mood, top_n)}
    if not affine:
        return 0
    return sum(1 for genre in genres if genre.lower() in affine)


def tags_for_mood(mood: Mood | str, limit: int | None = None) -> list[str]:
    """Return up to *limit* descriptive tags for *mood* (``[]`` if unknown)."""
    parsed = Mood.parse(mood)
    if parsed is None:
        return []
    tags = MOOD_TAGS.get(parsed, ())
    return list(tags if limit is None else tags[: max(0, limit)])


def mood_tags_for_genres(genres: Iterable[str]) -> tuple[str, ...]:
    """Derive a movie's descriptive mood tags from its genres.

    Tags are de-duplicated keeping first-seen order.  Unknown genres
    contribute nothing.
    """
    by_lower = {name.lower(): tags for name, tags in GENRE_TAGS.items()}
    seen: dict[str, None] = {}
    for genre in genres:
        for tag in by_lower.get(genre.lower(), ()):
            seen.setdefault(tag, None)
    return tuple(seen)
