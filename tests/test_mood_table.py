"""Tests for the static mood/genre tables in moodreco.mood_table."""

from __future__ import annotations

from moodreco.mood_table import (
    GENRE_IDS,
    GENRE_NAMES,
    GENRE_TAGS,
    MOOD_GENRES,
    MOOD_TAGS,
    genre_ids_for_mood,
    genre_overlap,
    genres_for_mood,
    mood_tags_for_genres,
    tags_for_mood,
)
from moodreco.models import Mood


class TestTables:
    def test_every_mood_has_genres_and_tags(self) -> None:
        for mood in Mood:
            assert MOOD_GENRES[mood]
            assert len(MOOD_TAGS[mood]) == 4

    def test_mood_genres_use_known_genre_names(self) -> None:
        for genres in MOOD_GENRES.values():
            for genre in genres:
                assert genre in GENRE_IDS

    def test_genre_tags_use_known_genre_names(self) -> None:
        assert set(GENRE_TAGS) <= set(GENRE_IDS)

    def test_genre_names_inverse(self) -> None:
        for name, genre_id in GENRE_IDS.items():
            assert GENRE_NAMES[genre_id] == name


class TestGenresForMood:
    def test_limit(self) -> None:
        assert genres_for_mood(Mood.HAPPY, 2) == ["Comedy", "Animation"]

    def test_accepts_label(self) -> None:
        assert genres_for_mood("anxious", 1) == ["Thriller"]

    def test_no_limit_returns_all(self) -> None:
        assert genres_for_mood(Mood.SAD) == ["Drama", "Romance", "Documentary"]

    def test_unknown_mood_is_empty(self) -> None:
        assert genres_for_mood("grumpy", 3) == []

    def test_zero_limit(self) -> None:
        assert genres_for_mood(Mood.CALM, 0) == []

    def test_genre_ids(self) -> None:
        assert genre_ids_for_mood(Mood.ENERGETIC, 3) == [28, 12, 878]


class TestGenreOverlap:
    def test_counts_matches_in_top_three(self) -> None:
        assert genre_overlap(["Comedy", "Family", "Drama"], Mood.HAPPY) == 2

    def test_ignores_distant_affinity(self) -> None:
        # Music is fourth for happy
        assert genre_overlap(["Music"], Mood.HAPPY) == 0
        assert genre_overlap(["Music"], Mood.HAPPY, top_n=4) == 1

    def test_case_insensitive(self) -> None:
        assert genre_overlap(["comedy"], Mood.HAPPY) == 1

    def test_unknown_mood(self) -> None:
        assert genre_overlap(["Comedy"], "grumpy") == 0


class TestTags:
    def test_tags_for_mood_limit(self) -> None:
        assert tags_for_mood(Mood.CALM, 2) == ["peaceful", "relaxing"]

    def test_tags_for_unknown_mood(self) -> None:
        assert tags_for_mood("grumpy") == []

    def test_mood_tags_for_genres_dedupes_in_order(self) -> None:
        tags = mood_tags_for_genres(["Action", "Crime"])
        assert tags == ("energetic", "intense", "action-packed", "suspenseful", "dark")

    def test_mood_tags_for_unknown_genre(self) -> None:
        assert mood_tags_for_genres(["Opera"]) == ()
