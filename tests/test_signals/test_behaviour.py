"""Tests for ResponseTimeSignal."""

from __future__ import annotations

import pytest

from moodreco.models import AuxSignals, Mood, MoodAnalysis, Movie
from moodreco.signals.behaviour import ResponseTimeSignal

ANALYSIS = MoodAnalysis(primary_mood=Mood.CALM)
MOVIE = Movie(1, "A")


class TestResponseTime:
    @pytest.mark.parametrize(
        "mean_ms, expected",
        [
            (None, 0.0),
            (1200.0, 5.0),
            (3000.0, 0.0),
            (5000.0, 0.0),
            (8000.0, 0.0),
            (9500.0, 3.0),
        ],
    )
    def test_thresholds(self, mean_ms, expected) -> None:
        aux = AuxSignals(mean_elapsed_ms=mean_ms)
        assert ResponseTimeSignal().contribute(MOVIE, ANALYSIS, aux) == expected
