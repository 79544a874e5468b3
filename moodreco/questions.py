"""Default puzzle question bank and minigame lookup tables."""

from __future__ import annotations

from typing import Iterable

from moodreco.models import Mood, QuestionDefinition, QuestionKind

# Colors offered by the color picker and the mood each one signals.
COLOR_MOODS: dict[str, Mood] = {
    "#FF6B6B": Mood.EXCITED,        # passionate red
    "#4ECDC4": Mood.CALM,           # calm teal
    "#45B7D1": Mood.CONTEMPLATIVE,  # peaceful blue
    "#96CEB4": Mood.OPTIMISTIC,     # refreshing green
    "#FECA57": Mood.HAPPY,          # energetic yellow
    "#FF9FF3": Mood.ROMANTIC,       # dreamy pink
    "#54A0FF": Mood.ADVENTUROUS,    # adventure blue
    "#5F27CD": Mood.MYSTERIOUS,     # mysterious purple
    "#00D2D3": Mood.ENERGETIC,      # creative cyan
    "#FF9F43": Mood.HAPPY,          # warm orange
    "#6C5CE7": Mood.CONTEMPLATIVE,  # thoughtful lavender
    "#A29BFE": Mood.CALM,           # gentle violet
    "#FD79A8": Mood.ROMANTIC,       # playful rose
    "#636E72": Mood.MELANCHOLIC,    # melancholic gray
    "#2D3436": Mood.MYSTERIOUS,     # deep black
    "#DDA0DD": Mood.NOSTALGIC,      # nostalgic plum
}

# Words offered by the word-association puzzle.
WORD_MOODS: dict[str, Mood] = {
    "sunshine": Mood.HAPPY,
    "rain": Mood.MELANCHOLIC,
    "storm": Mood.ANXIOUS,
    "journey": Mood.ADVENTUROUS,
    "secret": Mood.MYSTERIOUS,
    "heart": Mood.ROMANTIC,
    "photograph": Mood.NOSTALGIC,
    "question": Mood.THOUGHTFUL,
    "lake": Mood.CALM,
    "fireworks": Mood.EXCITED,
    "sprint": Mood.ENERGETIC,
    "dawn": Mood.OPTIMISTIC,
    "silence": Mood.CONTEMPLATIVE,
    "goodbye": Mood.SAD,
}

DEFAULT_QUESTIONS: list[QuestionDefinition] = [
    QuestionDefinition(
        question_id="energy",
        prompt="How much energy do you have right now?",
        kind=QuestionKind.SLIDER,
        mood_weights={"energetic": 0.8, "excited": 0.4, "calm": -0.4},
    ),
    QuestionDefinition(
        question_id="colors",
        prompt="Tap the colors that speak to you.",
        kind=QuestionKind.COLOR_SELECTION,
        mood_weights={},
    ),
    QuestionDefinition(
        question_id="words",
        prompt="Pick the words that resonate with you.",
        kind=QuestionKind.WORD_SELECTION,
        mood_weights={},
    ),
    QuestionDefinition(
        question_id="evening",
        prompt="Your ideal evening is...",
        kind=QuestionKind.SCENARIO,
        mood_weights={"calm": 0.6, "romantic": 0.4, "contemplative": 0.3},
    ),
    QuestionDefinition(
        question_id="weekend",
        prompt="A free weekend appears. You...",
        kind=QuestionKind.MULTIPLE_CHOICE,
        mood_weights={"adventurous": 0.7, "excited": 0.3, "optimistic": 0.2},
    ),
    QuestionDefinition(
        question_id="maze",
        prompt="Find your way through the maze.",
        kind=QuestionKind.MAZE,
        mood_weights={"thoughtful": 0.5, "mysterious": 0.3},
    ),
]


def color_payload(colors: Iterable[str]) -> dict[str, object]:
    """Build the color picker's structured payload for *colors*.

    Unknown colors are ignored.

    Returns:
        ``{"colors": [...], "mood_distribution": {mood_label: count}}``.
    """
    picked = [c.upper() for c in colors]
    distribution: dict[str, int] = {}
    for color in picked:
        mood = COLOR_MOODS.get(color)
        if mood is not None:
            distribution[mood.value] = distribution.get(mood.value, 0) + 1
    return {"colors": picked, "mood_distribution": distribution}


def word_payload(words: Iterable[str]) -> list[str]:
    """Translate selected words into the mood labels they stand for."""
    return [
        WORD_MOODS[w.strip().lower()].value
        for w in words
        if w.strip().lower() in WORD_MOODS
    ]
