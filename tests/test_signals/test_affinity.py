"""Tests for GenreAffinitySignal and ObservedMoodSignal."""

from __future__ import annotations

import pytest

from moodreco.models import AuxSignals, Mood, MoodAnalysis, Movie
from moodreco.signals.affinity import GenreAffinitySignal, ObservedMoodSignal

NO_AUX = AuxSignals.none()


def _analysis(primary: Mood, *secondary: Mood) -> MoodAnalysis:
    return MoodAnalysis(primary_mood=primary, secondary_moods=secondary)


class TestPrimaryAffinity:
    @pytest.fixture
    def signal(self) -> GenreAffinitySignal:
        return GenreAffinitySignal(per_match=15.0, cap=30.0)

    def test_single_match(self, signal) -> None:
        movie = Movie(1, "A", genres=("Comedy", "Drama"))
        assert signal.contribute(movie, _analysis(Mood.HAPPY), NO_AUX) == 15.0

    def test_capped(self, signal, movie_action) -> None:
        # Action, Adventure and Science Fiction are all energetic top-three genres
        assert signal.contribute(movie_action, _analysis(Mood.ENERGETIC), NO_AUX) == 30.0

    def test_no_match(self, signal, movie_documentary) -> None:
        assert signal.contribute(movie_documentary, _analysis(Mood.ENERGETIC), NO_AUX) == 0.0

    def test_distant_genre_ignored(self, signal) -> None:
        movie = Movie(1, "A", genres=("Music",))
        assert signal.contribute(movie, _analysis(Mood.HAPPY), NO_AUX) == 0.0

    def test_ignores_secondary_moods(self, signal) -> None:
        movie = Movie(1, "A", genres=("Horror",))
        analysis = _analysis(Mood.HAPPY, Mood.ANXIOUS)
        assert signal.contribute(movie, analysis, NO_AUX) == 0.0


class TestSecondaryAffinity:
    def test_sums_across_secondary_moods(self) -> None:
        signal = GenreAffinitySignal(per_match=5.0, cap=100.0, secondary=True)
        movie = Movie(1, "A", genres=("Drama", "Romance"))
        analysis = _analysis(Mood.HAPPY, Mood.SAD, Mood.ROMANTIC)
        assert signal.contribute(movie, analysis, NO_AUX) == 20.0

    def test_capped(self) -> None:
        signal = GenreAffinitySignal(per_match=5.0, cap=15.0, secondary=True)
        movie = Movie(1, "A", genres=("Drama", "Romance"))
        analysis = _analysis(Mood.HAPPY, Mood.SAD, Mood.ROMANTIC)
        assert signal.contribute(movie, analysis, NO_AUX) == 15.0

    def test_no_secondary_moods(self, movie_action) -> None:
        signal = GenreAffinitySignal(per_match=5.0, cap=20.0, secondary=True)
        assert signal.contribute(movie_action, _analysis(Mood.ENERGETIC), NO_AUX) == 0.0


class TestObservedMood:
    def test_counts_occurrences_of_matching_moods(self) -> None:
        signal = ObservedMoodSignal(per_occurrence=2.0, cap=10.0)
        movie = Movie(1, "A", genres=("Action",))
        aux = AuxSignals(observed_moods={Mood.ENERGETIC: 2, Mood.CALM: 1})
        assert signal.contribute(movie, _analysis(Mood.HAPPY), aux) == 4.0

    def test_capped(self) -> None:
        signal = ObservedMoodSignal(per_occurrence=2.0, cap=10.0)
        movie = Movie(1, "A", genres=("Action",))
        aux = AuxSignals(observed_moods={Mood.ENERGETIC: 10})
        assert signal.contribute(movie, _analysis(Mood.HAPPY), aux) == 10.0

    def test_no_observations(self, movie_action) -> None:
        assert ObservedMoodSignal().contribute(movie_action, _analysis(Mood.HAPPY), NO_AUX) == 0.0
