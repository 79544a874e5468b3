"""Shared pytest fixtures for all moodreco tests."""

from __future__ import annotations

import pytest

from moodreco.models import (
    InteractionResponse,
    Mood,
    MoodAnalysis,
    Movie,
    QuestionDefinition,
    QuestionKind,
)

CURRENT_YEAR = 2026

# ---------------------------------------------------------------------------
# Movie fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def movie_action() -> Movie:
    return Movie(1, "Road Fury", 2015, ("Action", "Adventure", "Science Fiction"), "en", 8.0, 20000)


@pytest.fixture
def movie_comedy() -> Movie:
    return Movie(2, "Sunny Side", 2025, ("Comedy", "Family"), "en", 6.8, 900)


@pytest.fixture
def movie_drama() -> Movie:
    return Movie(3, "Long Winter", 2012, ("Drama", "History"), "en", 7.9, 4000)


@pytest.fixture
def movie_horror() -> Movie:
    return Movie(4, "The Cellar", 2023, ("Horror", "Thriller", "Mystery"), "en", 6.1, 2500)


@pytest.fixture
def movie_french() -> Movie:
    return Movie(5, "Le Petit Café", 2019, ("Romance", "Comedy"), "fr", 7.4, 1800)


@pytest.fixture
def movie_documentary() -> Movie:
    return Movie(6, "Quiet Film", 2025, ("Documentary",), "en", 6.0, 500)


@pytest.fixture
def sample_movies(
    movie_action, movie_comedy, movie_drama, movie_horror, movie_french, movie_documentary
) -> list[Movie]:
    """Ten-movie catalogue spanning several genres and two languages."""
    extra = [
        Movie(7, "Star Runner", 2024, ("Science Fiction", "Action"), "en", 7.1, 6000),
        Movie(8, "Hidden Letters", 2018, ("Mystery", "Drama"), "fr", 7.7, 1200),
        Movie(9, "Big Laughs", 2010, ("Comedy",), "en", 5.5, 300),
        Movie(10, "Mountain Echo", 2021, ("Adventure", "Drama"), "en", 7.3, 3100),
    ]
    return [
        movie_action, movie_comedy, movie_drama, movie_horror, movie_french,
        movie_documentary,
    ] + extra


# ---------------------------------------------------------------------------
# Question bank / responses
# ---------------------------------------------------------------------------


@pytest.fixture
def question_bank() -> list[QuestionDefinition]:
    return [
        QuestionDefinition(
            "energy", {"energetic": 0.8, "calm": -0.4}, kind=QuestionKind.SLIDER
        ),
        QuestionDefinition("evening", {"calm": 0.6, "romantic": 0.4}),
        QuestionDefinition("weekend", {"adventurous": 0.7, "excited": 0.3}),
        QuestionDefinition(
            "maze", {"thoughtful": 0.5, "mysterious": 0.3}, kind=QuestionKind.MAZE
        ),
        QuestionDefinition("colors", {}, kind=QuestionKind.COLOR_SELECTION),
    ]


@pytest.fixture
def energetic_responses() -> list[InteractionResponse]:
    return [
        InteractionResponse("energy", 9, elapsed_ms=2000),
        InteractionResponse("weekend", "hike", elapsed_ms=1500),
    ]


# ---------------------------------------------------------------------------
# Mood analysis fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def energetic_analysis() -> MoodAnalysis:
    """Primary energetic with an excited undertone."""
    return MoodAnalysis(
        primary_mood=Mood.ENERGETIC,
        secondary_moods=(Mood.EXCITED,),
        confidence=1.0,
        tags=(
            "fast-paced", "dynamic", "high-energy", "action-packed",
            "thrilling", "energetic",
        ),
    )


@pytest.fixture
def happy_analysis() -> MoodAnalysis:
    """Primary happy, no secondary moods."""
    return MoodAnalysis(
        primary_mood=Mood.HAPPY,
        confidence=1.0,
        tags=("joyful", "upbeat", "cheerful", "positive"),
    )
