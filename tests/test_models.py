"""Tests for moodreco.models dataclasses and payload helpers."""

from __future__ import annotations

import dataclasses

import pytest

from moodreco.models import (
    AuxSignals,
    InteractionResponse,
    Mood,
    Movie,
    RecommendationResult,
    structured_mood_counts,
)


class TestMood:
    def test_parse_label(self) -> None:
        assert Mood.parse("calm") is Mood.CALM

    def test_parse_is_case_insensitive(self) -> None:
        assert Mood.parse("  Nostalgic ") is Mood.NOSTALGIC

    def test_parse_member(self) -> None:
        assert Mood.parse(Mood.SAD) is Mood.SAD

    def test_parse_unknown_returns_none(self) -> None:
        assert Mood.parse("grumpy") is None

    def test_parse_non_string_returns_none(self) -> None:
        assert Mood.parse(42) is None
        assert Mood.parse(None) is None

    def test_fourteen_moods(self) -> None:
        assert len(Mood) == 14

    def test_is_str(self) -> None:
        assert Mood.HAPPY == "happy"


class TestMovie:
    def test_frozen(self, movie_action) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            movie_action.title = "Other"  # type: ignore[misc]

    def test_defaults(self) -> None:
        movie = Movie(movie_id=1, title="Untitled")
        assert movie.genres == ()
        assert movie.year is None
        assert movie.mood_tags == ()


class TestStructuredMoodCounts:
    def test_plain_mapping(self) -> None:
        assert structured_mood_counts({"calm": 2, "happy": 1}) == {
            Mood.CALM: 2.0,
            Mood.HAPPY: 1.0,
        }

    def test_wrapped_distribution(self) -> None:
        payload = {"colors": ["#4ECDC4"], "mood_distribution": {"calm": 1}}
        assert structured_mood_counts(payload) == {Mood.CALM: 1.0}

    def test_camel_case_wrapper(self) -> None:
        payload = {"dominantMood": "sad", "moodDistribution": {"sad": 3}}
        assert structured_mood_counts(payload) == {Mood.SAD: 3.0}

    def test_sequence_of_labels(self) -> None:
        assert structured_mood_counts(["calm", "calm", "sad", "nope"]) == {
            Mood.CALM: 2.0,
            Mood.SAD: 1.0,
        }

    def test_ignores_unknown_and_bad_counts(self) -> None:
        payload = {"calm": "lots", "grumpy": 3, "happy": -1, "sad": True, "romantic": 2}
        assert structured_mood_counts(payload) == {Mood.ROMANTIC: 2.0}

    def test_maze_metrics_have_no_moods(self) -> None:
        assert structured_mood_counts({"moves": 12, "time_ms": 4000}) == {}

    def test_scalars_have_no_moods(self) -> None:
        assert structured_mood_counts(7) == {}
        assert structured_mood_counts("calm") == {}
        assert structured_mood_counts(None) == {}


class TestAuxSignals:
    def test_none_is_empty(self) -> None:
        aux = AuxSignals.none()
        assert aux.mean_elapsed_ms is None
        assert aux.observed_moods == {}

    def test_mean_elapsed(self) -> None:
        responses = [
            InteractionResponse("a", 1, elapsed_ms=1000),
            InteractionResponse("b", 1, elapsed_ms=3000),
        ]
        assert AuxSignals.from_responses(responses).mean_elapsed_ms == pytest.approx(2000)

    def test_missing_timings_ignored(self) -> None:
        responses = [
            InteractionResponse("a", 1),
            InteractionResponse("b", 1, elapsed_ms=4000),
        ]
        assert AuxSignals.from_responses(responses).mean_elapsed_ms == pytest.approx(4000)

    def test_no_timings(self) -> None:
        assert AuxSignals.from_responses([InteractionResponse("a", 1)]).mean_elapsed_ms is None

    def test_observed_moods_from_payloads(self) -> None:
        responses = [
            InteractionResponse("colors", {"mood_distribution": {"calm": 2, "happy": 1}}),
            InteractionResponse("words", ["calm", "sad"]),
            InteractionResponse("energy", 8),
        ]
        aux = AuxSignals.from_responses(responses)
        assert aux.observed_moods == {Mood.CALM: 3, Mood.HAPPY: 1, Mood.SAD: 1}

    def test_top_observed_order_and_ties(self) -> None:
        aux = AuxSignals(observed_moods={Mood.SAD: 1, Mood.CALM: 3, Mood.HAPPY: 1})
        assert aux.top_observed(2) == [Mood.CALM, Mood.HAPPY]


class TestRecommendationResult:
    def test_ok_without_error(self) -> None:
        assert RecommendationResult().ok

    def test_not_ok_with_error(self) -> None:
        result = RecommendationResult(error="boom")
        assert not result.ok
        assert result.recommendations == []
