"""Movie match scorer: composes score signals and writes the reason string."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Sequence

from moodreco.models import AuxSignals, Mood, Movie, MoodAnalysis
from moodreco.signals.affinity import GenreAffinitySignal, ObservedMoodSignal
from moodreco.signals.base import ScoreSignal
from moodreco.signals.behaviour import ResponseTimeSignal
from moodreco.signals.quality import QualitySignal
from moodreco.signals.recency import RecencySignal
from moodreco.signals.tags import TagOverlapSignal

logger = logging.getLogger(__name__)

BASE_SCORE = 50.0
MIN_SCORE = 0
MAX_SCORE = 100

_REASON_TEMPLATES: dict[Mood, tuple[str, ...]] = {
    Mood.HAPPY: (
        "Feel-good {genres} enhancing your joyful mood",
        "Uplifting {genres} that resonates with your happiness",
        "Cheerful {genres} perfect for your positive vibes",
    ),
    Mood.SAD: (
        "Moving {genres} that honours how you feel",
        "Gentle {genres} for a quiet, emotional evening",
        "Cathartic {genres} that understands your mood",
    ),
    Mood.EXCITED: (
        "Thrilling {genres} for your adventurous spirit",
        "Dynamic {genres} matching your enthusiasm",
        "Exhilarating {genres} perfect for your eager mood",
    ),
    Mood.CALM: (
        "Peaceful {genres} ideal for your relaxed state",
        "Soothing {genres} that complements your tranquility",
        "Gentle {genres} for your calm mindset",
    ),
    Mood.ANXIOUS: (
        "Comforting {genres} to ease your tension",
        "Engaging {genres} that provides relief and distraction",
        "Absorbing {genres} to help you unwind",
    ),
    Mood.ROMANTIC: (
        "Heartwarming {genres} for your loving mood",
        "Tender {genres} that touches your romantic side",
        "Beautiful {genres} perfect for your emotional state",
    ),
    Mood.NOSTALGIC: (
        "Touching {genres} that speaks to your reflective mood",
        "Sentimental {genres} evoking meaningful memories",
        "Heartfelt {genres} matching your nostalgic feelings",
    ),
    Mood.ADVENTUROUS: (
        "Epic {genres} for your sense of adventure",
        "Far-reaching {genres} to feed your wanderlust",
        "Bold {genres} matching your appetite for exploration",
    ),
    Mood.MYSTERIOUS: (
        "Intriguing {genres} for your curious mind",
        "Enigmatic {genres} to keep you guessing",
        "Atmospheric {genres} matching your mysterious mood",
    ),
    Mood.THOUGHTFUL: (
        "Profound {genres} for your contemplative state",
        "Thought-provoking {genres} engaging your introspective mind",
        "Deep {genres} that resonates with your reflective mood",
    ),
    Mood.ENERGETIC: (
        "High-energy {genres} perfect for your dynamic mood",
        "Action-packed {genres} matching your vibrant energy",
        "Thrilling {genres} that channels your excitement",
    ),
    Mood.MELANCHOLIC: (
        "Bittersweet {genres} that mirrors your wistful mood",
        "Poignant {genres} for a reflective evening",
        "Somber, beautiful {genres} that meets you where you are",
    ),
    Mood.OPTIMISTIC: (
        "Hopeful {genres} to match your bright outlook",
        "Inspiring {genres} for your optimistic mood",
        "Uplifting {genres} that keeps the good vibes going",
    ),
    Mood.CONTEMPLATIVE: (
        "Meditative {genres} for your introspective mood",
        "Quietly profound {genres} to think over",
        "Reflective {genres} suited to your contemplative state",
    ),
}

_GENERIC_TEMPLATE = "Great {genres} choice for your current mood"
_FALLBACK_GENRES = "film"


@dataclass(frozen=True)
class MatchResult:
    """A bounded integer score and its justification."""

    score: int
    reason: str


def default_signals(current_year: int | None = None) -> list[ScoreSignal]:
    """Return the standard signal set.

    Args:
        current_year: Reference year for the recency bonus (defaults to
            today).
    """
    return [
        GenreAffinitySignal(per_match=15.0, cap=30.0),
        GenreAffinitySignal(per_match=5.0, cap=20.0, secondary=True),
        TagOverlapSignal(per_overlap=3.0, cap=12.0),
        QualitySignal(),
        RecencySignal(current_year=current_year),
        ResponseTimeSignal(),
        ObservedMoodSignal(),
    ]


class MovieMatchScorer:
    """Scores a movie against a mood analysis.

    The score is ``base + sum(signal contributions) + jitter``, rounded and
    clamped to ``[0, 100]``.  Jitter is drawn uniformly from
    ``[0, jitter)`` using *rng*; pass ``jitter=0`` (or a seeded
    :class:`random.Random`) for reproducible scores.

    With :meth:`AuxSignals.none` the behaviour-driven signals contribute
    nothing and the score reduces to genre/tag matching plus quality.

    Args:
        signals: Additive contributions; defaults to :func:`default_signals`.
        base_score: Neutral starting score.
        jitter: Upper bound of the random freshness bonus.
        rng: Random source for jitter and reason template choice.
    """

    def __init__(
        self,
        signals: Sequence[ScoreSignal] | None = None,
        base_score: float = BASE_SCORE,
        jitter: float = 5.0,
        rng: random.Random | None = None,
    ) -> None:
        self._signals = list(signals) if signals is not None else default_signals()
        self._base_score = base_score
        self._jitter = max(0.0, jitter)
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def score(
        self,
        movie: Movie,
        analysis: MoodAnalysis,
        aux: AuxSignals | None = None,
    ) -> MatchResult:
        """Return the match score and reason for *movie*.

        Args:
            movie: Candidate movie.
            analysis: The user's mood analysis.
            aux: Behavioural signals; ``None`` means none.

        Returns:
            A :class:`MatchResult` with ``0 <= score <= 100``.
        """
        aux = aux or AuxSignals.none()
        raw = self._base_score
        for signal in self._signals:
            raw += signal.contribute(movie, analysis, aux)
        if self._jitter > 0.0:
            raw += self._rng.uniform(0.0, self._jitter)
        if math.isnan(raw):
            logger.debug("Non-numeric score for movie %r; using base score.", movie.movie_id)
            raw = self._base_score
        score = int(round(min(MAX_SCORE, max(MIN_SCORE, raw))))
        return MatchResult(score=score, reason=self.reason(movie, analysis, aux))

    def reason(
        self,
        movie: Movie,
        analysis: MoodAnalysis,
        aux: AuxSignals | None = None,
    ) -> str:
        """Return a short human-readable justification for recommending *movie*."""
        aux = aux or AuxSignals.none()
        genres = " and ".join(g.lower() for g in movie.genres[:2]) or _FALLBACK_GENRES

        primary = Mood.parse(analysis.primary_mood)
        templates = _REASON_TEMPLATES.get(primary) if primary else None
        template = self._rng.choice(templates) if templates else _GENERIC_TEMPLATE
        reason = template.format(genres=genres)

        undertone = _undertone(primary, analysis, aux)
        if undertone is not None:
            reason += f" with {undertone.value} undertones"
        return reason


def _undertone(
    primary: Mood | None, analysis: MoodAnalysis, aux: AuxSignals
) -> Mood | None:
    """Strongest secondary mood: most observed first, else first secondary."""
    for mood in aux.top_observed(len(aux.observed_moods)):
        if mood != primary:
            return mood
    for label in analysis.secondary_moods:
        mood = Mood.parse(label)
        if mood is not None and mood != primary:
            return mood
    return None
