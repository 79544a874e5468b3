"""Core domain dataclasses shared across all moodreco modules."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Sequence


class Mood(str, Enum):
    """Mood labels the analyzer can infer.

    Declaration order doubles as the tie-break priority when two moods end
    up with the same normalized score: earlier members win.
    """

    HAPPY = "happy"
    SAD = "sad"
    EXCITED = "excited"
    CALM = "calm"
    ANXIOUS = "anxious"
    ROMANTIC = "romantic"
    NOSTALGIC = "nostalgic"
    ADVENTUROUS = "adventurous"
    MYSTERIOUS = "mysterious"
    THOUGHTFUL = "thoughtful"
    ENERGETIC = "energetic"
    MELANCHOLIC = "melancholic"
    OPTIMISTIC = "optimistic"
    CONTEMPLATIVE = "contemplative"

    @classmethod
    def parse(cls, label: Any) -> Mood | None:
        """Return the member for *label* (case-insensitive), or ``None``."""
        if isinstance(label, Mood):
            return label
        if not isinstance(label, str):
            return None
        try:
            return cls(label.strip().lower())
        except ValueError:
            return None


MOOD_ORDER: tuple[Mood, ...] = tuple(Mood)


class QuestionKind(str, Enum):
    """Puzzle formats offered by the puzzle flow."""

    MULTIPLE_CHOICE = "multiple-choice"
    SLIDER = "slider"
    COLOR_SELECTION = "color-selection"
    WORD_SELECTION = "word-selection"
    SCENARIO = "scenario"
    MAZE = "maze"


@dataclass(frozen=True)
class InteractionResponse:
    """One answer to one puzzle question.

    Attributes:
        question_id: Identifier of the answered question.
        value: The answer. One of:

            * an option identifier (``str``), possibly numeric-looking;
            * a slider value (``int`` / ``float``);
            * a mood distribution (``Mapping[str, number]``), optionally
              wrapped as ``{"mood_distribution": {...}}`` by minigames;
            * a sequence of mood labels (e.g. word association picks).
        elapsed_ms: Time the user took to answer, in milliseconds.
    """

    question_id: str
    value: Any
    elapsed_ms: float = 0.0


@dataclass
class QuestionDefinition:
    """A puzzle question and how its answers move the mood vector.

    Attributes:
        question_id: Unique identifier referenced by responses.
        mood_weights: Signed weight per mood label.  Each response adds
            ``weight * magnitude`` to the mood's running total.
        prompt: Text shown to the user.
        kind: The puzzle format.
    """

    question_id: str
    mood_weights: dict[str, float]
    prompt: str = ""
    kind: QuestionKind = QuestionKind.MULTIPLE_CHOICE


@dataclass(frozen=True)
class MoodAnalysis:
    """Immutable summary of a normalized mood vector.

    Attributes:
        primary_mood: Highest-scoring mood.
        secondary_moods: Next-highest moods above the inclusion threshold.
        confidence: The primary mood's normalized score, in [0, 1].
        tags: Descriptive keywords for the primary and secondary moods.
        energy: Projection onto high- vs low-energy moods, in [0, 1].
        valence: Projection onto positive vs negative moods, in [0, 1].
        mood_vector: Normalized score for every mood label.
        has_signal: ``False`` when no response carried any mood signal and
            the analysis is the documented default.
        created_at: When the analysis was produced (UTC).
    """

    primary_mood: Mood
    secondary_moods: tuple[Mood, ...] = ()
    confidence: float = 0.0
    tags: tuple[str, ...] = ()
    energy: float = 0.5
    valence: float = 0.5
    mood_vector: Mapping[Mood, float] = field(default_factory=dict)
    has_signal: bool = True
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


@dataclass(frozen=True)
class Movie:
    """A movie as supplied by a catalogue source.

    Attributes:
        movie_id: Stable numeric identifier.
        title: Display title.
        year: Release year, ``None`` when unknown.
        genres: Genre names (TMDB vocabulary, e.g. ``"Science Fiction"``).
        language: ISO 639-1 original language code.
        rating: Average rating on a 0-10 scale.
        vote_count: Number of ratings behind :attr:`rating`.
        overview: Plot summary.
        poster_path: Relative poster path on the image CDN, if any.
        mood_tags: Descriptive mood keywords, usually derived from genres.
    """

    movie_id: int
    title: str
    year: int | None = None
    genres: tuple[str, ...] = ()
    language: str = ""
    rating: float = 0.0
    vote_count: int = 0
    overview: str = ""
    poster_path: str | None = None
    mood_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class AuxSignals:
    """Behavioural side-channels that refine a match score.

    Attributes:
        mean_elapsed_ms: Average answer time across the response set, or
            ``None`` if no timings were recorded.
        observed_moods: How often each mood appeared directly in structured
            minigame payloads.
    """

    mean_elapsed_ms: float | None = None
    observed_moods: Mapping[Mood, int] = field(default_factory=dict)

    @classmethod
    def none(cls) -> AuxSignals:
        """Return the empty signal set."""
        return cls()

    @classmethod
    def from_responses(cls, responses: Sequence[InteractionResponse]) -> AuxSignals:
        """Derive timing and observed-mood signals from *responses*."""
        timings = [
            float(r.elapsed_ms)
            for r in responses
            if isinstance(r.elapsed_ms, (int, float)) and r.elapsed_ms > 0
        ]
        observed: Counter[Mood] = Counter()
        for response in responses:
            for mood, count in structured_mood_counts(response.value).items():
                observed[mood] += max(1, int(round(count)))
        return cls(
            mean_elapsed_ms=sum(timings) / len(timings) if timings else None,
            observed_moods=dict(observed),
        )

    def top_observed(self, n: int) -> list[Mood]:
        """Return up to *n* observed moods, most frequent first.

        Ties keep :class:`Mood` declaration order.
        """
        ranked = sorted(
            self.observed_moods.items(),
            key=lambda item: (-item[1], MOOD_ORDER.index(item[0])),
        )
        return [mood for mood, count in ranked[:n] if count > 0]


@dataclass(frozen=True)
class MovieRecommendation:
    """A scored movie with a human-readable justification."""

    movie: Movie
    match_score: int
    reason: str


@dataclass
class RecommendationResult:
    """Outcome of a recommendation request at the service boundary.

    Attributes:
        recommendations: Ordered recommendations; empty on error.
        error: Human-readable failure description, ``None`` on success.
    """

    recommendations: list[MovieRecommendation] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """``True`` when the request succeeded."""
        return self.error is None


# ---------------------------------------------------------------------------
# Structured payload helpers
# ---------------------------------------------------------------------------

_DISTRIBUTION_KEYS = ("mood_distribution", "moodDistribution")


def structured_mood_counts(value: Any) -> dict[Mood, float]:
    """Extract ``(mood, count)`` pairs from a minigame payload.

    Accepts a mood -> count mapping (optionally wrapped under
    ``mood_distribution``) or a sequence of mood labels.  Unknown labels and
    non-numeric or negative counts are ignored.  Scalars yield ``{}``.

    Args:
        value: A response value.

    Returns:
        Mood -> positive count.  Empty if the payload names no known mood.
    """
    if isinstance(value, Mapping):
        for key in _DISTRIBUTION_KEYS:
            inner = value.get(key)
            if isinstance(inner, Mapping):
                value = inner
                break
        counts: dict[Mood, float] = {}
        for label, count in value.items():
            mood = Mood.parse(label)
            if mood is None or isinstance(count, bool):
                continue
            if not isinstance(count, (int, float)) or not math.isfinite(count):
                continue
            if count > 0:
                counts[mood] = counts.get(mood, 0.0) + float(count)
        return counts

    if isinstance(value, (list, tuple, set, frozenset)):
        counts = {}
        for label in value:
            mood = Mood.parse(label)
            if mood is not None:
                counts[mood] = counts.get(mood, 0.0) + 1.0
        return counts

    return {}
