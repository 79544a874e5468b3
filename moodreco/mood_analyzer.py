"""Mood vector builder: turns a response set into a :class:`MoodAnalysis`."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Sequence

import numpy as np

from moodreco.mood_table import tags_for_mood
from moodreco.models import (
    MOOD_ORDER,
    InteractionResponse,
    Mood,
    MoodAnalysis,
    QuestionDefinition,
    structured_mood_counts,
)

logger = logging.getLogger(__name__)

_INDEX = {mood: i for i, mood in enumerate(MOOD_ORDER)}

_PROJECTION_BASE = 0.5
_PROJECTION_FACTOR = 0.3


def _projection(positive: Iterable[Mood], negative: Iterable[Mood]) -> np.ndarray:
    vec = np.zeros(len(MOOD_ORDER), dtype=np.float64)
    for mood in positive:
        vec[_INDEX[mood]] = _PROJECTION_FACTOR
    for mood in negative:
        vec[_INDEX[mood]] = -_PROJECTION_FACTOR
    return vec


_ENERGY_WEIGHTS = _projection(
    positive=(Mood.EXCITED, Mood.ENERGETIC, Mood.HAPPY, Mood.ADVENTUROUS),
    negative=(Mood.CALM, Mood.CONTEMPLATIVE, Mood.MELANCHOLIC, Mood.SAD),
)
_VALENCE_WEIGHTS = _projection(
    positive=(Mood.HAPPY, Mood.EXCITED, Mood.OPTIMISTIC, Mood.ROMANTIC),
    negative=(Mood.SAD, Mood.ANXIOUS, Mood.MELANCHOLIC),
)


class MoodAnalyzer:
    """Builds a normalized mood vector and summarises it.

    Two accumulation paths feed one running vector:

    * **Weighted**: the response's question is looked up in the bank and
      each ``(mood, weight)`` pair adds ``weight * magnitude``.  Magnitude
      is the numeric value, a parsed numeric string, or ``1`` for
      categorical answers.
    * **Structured**: minigame payloads that enumerate ``(mood, count)``
      pairs add the counts directly, without a weight lookup.

    Negative totals are clamped to zero, then the vector is scaled so its
    largest entry is exactly ``1.0``.  A vector with no positive entry yields
    the fallback analysis (``has_signal=False``).

    The analyzer never raises for malformed input: unknown questions,
    unknown moods and unusable values are skipped.

    Args:
        max_secondary: Maximum number of secondary moods.
        secondary_threshold: Secondary moods must score strictly above this.
        max_tags: Cap on the number of descriptive tags.
        fallback_mood: Primary mood reported when there is no signal.
        fallback_confidence: Confidence reported when there is no signal.
    """

    def __init__(
        self,
        max_secondary: int = 3,
        secondary_threshold: float = 0.15,
        max_tags: int = 8,
        fallback_mood: Mood = Mood.HAPPY,
        fallback_confidence: float = 0.5,
    ) -> None:
        self._max_secondary = max_secondary
        self._secondary_threshold = secondary_threshold
        self._max_tags = max_tags
        self._fallback_mood = fallback_mood
        self._fallback_confidence = fallback_confidence

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def analyze(
        self,
        responses: Sequence[InteractionResponse],
        question_bank: Iterable[QuestionDefinition] | Mapping[str, QuestionDefinition],
    ) -> MoodAnalysis:
        """Return the mood analysis for *responses*.

        Args:
            responses: The completed response set.  Not modified.
            question_bank: Question definitions, as a sequence or keyed by id.

        Returns:
            A :class:`~moodreco.models.MoodAnalysis`.
        """
        vector = self.build_vector(responses, question_bank)
        return self.summarise(vector)

    def build_vector(
        self,
        responses: Sequence[InteractionResponse],
        question_bank: Iterable[QuestionDefinition] | Mapping[str, QuestionDefinition],
    ) -> np.ndarray:
        """Accumulate, clamp and normalize the mood vector.

        Returns:
            Array indexed in :class:`Mood` declaration order, max entry 1.0
            or all zeros.
        """
        bank = _index_bank(question_bank)
        totals = np.zeros(len(MOOD_ORDER), dtype=np.float64)

        with np.errstate(over="ignore", invalid="ignore"):
            for response in responses or ():
                value = getattr(response, "value", None)
                counts = structured_mood_counts(value)
                if counts:
                    for mood, count in counts.items():
                        totals[_INDEX[mood]] += count
                    continue

                question_id = getattr(response, "question_id", None)
                try:
                    question = bank.get(question_id)
                except TypeError:
                    question = None
                if question is None:
                    logger.debug("Skipping response for unknown question %r.", question_id)
                    continue
                self._accumulate_weighted(totals, question, _magnitude(value))

        # Overflowed totals saturate at the largest float; undefined ones drop out.
        np.nan_to_num(
            totals, copy=False, nan=0.0, posinf=np.finfo(np.float64).max, neginf=0.0
        )
        np.maximum(totals, 0.0, out=totals)
        peak = float(totals.max()) if totals.size else 0.0
        if peak > 0.0:
            totals /= peak
        return totals

    def summarise(self, vector: np.ndarray) -> MoodAnalysis:
        """Derive primary/secondary moods, tags and projections from *vector*."""
        mood_vector = {mood: float(vector[i]) for i, mood in enumerate(MOOD_ORDER)}
        energy = _clamp_unit(_PROJECTION_BASE + float(np.dot(vector, _ENERGY_WEIGHTS)))
        valence = _clamp_unit(_PROJECTION_BASE + float(np.dot(vector, _VALENCE_WEIGHTS)))

        if float(vector.max()) <= 0.0:
            logger.info("No mood signal in response set; using %s fallback.",
                        self._fallback_mood.value)
            return MoodAnalysis(
                primary_mood=self._fallback_mood,
                secondary_moods=(),
                confidence=self._fallback_confidence,
                tags=tuple(self._build_tags(self._fallback_mood, [])),
                energy=energy,
                valence=valence,
                mood_vector=mood_vector,
                has_signal=False,
            )

        ranked = rank_moods(vector)
        primary = ranked[0]
        secondary = [
            mood
            for mood in ranked[1 : 1 + self._max_secondary]
            if mood_vector[mood] > self._secondary_threshold
        ]
        return MoodAnalysis(
            primary_mood=primary,
            secondary_moods=tuple(secondary),
            confidence=mood_vector[primary],
            tags=tuple(self._build_tags(primary, secondary)),
            energy=energy,
            valence=valence,
            mood_vector=mood_vector,
            has_signal=True,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _accumulate_weighted(
        totals: np.ndarray, question: QuestionDefinition, magnitude: float
    ) -> None:
        weights = getattr(question, "mood_weights", None)
        if not isinstance(weights, Mapping):
            return
        for label, weight in weights.items():
            mood = Mood.parse(label)
            if mood is None or isinstance(weight, bool):
                continue
            if not isinstance(weight, (int, float)) or not math.isfinite(weight):
                continue
            totals[_INDEX[mood]] += weight * magnitude

    def _build_tags(self, primary: Mood, secondary: Sequence[Mood]) -> list[str]:
        tags = tags_for_mood(primary, 4)
        for mood in secondary:
            tags.extend(tags_for_mood(mood, 2))
        return list(dict.fromkeys(tags))[: self._max_tags]


def build_mood_analysis(
    responses: Sequence[InteractionResponse],
    question_bank: Iterable[QuestionDefinition] | Mapping[str, QuestionDefinition],
) -> MoodAnalysis:
    """Analyze *responses* with default thresholds."""
    return MoodAnalyzer().analyze(responses, question_bank)


def rank_moods(vector: np.ndarray) -> list[Mood]:
    """Return moods sorted by descending score, ties in declaration order."""
    order = sorted(range(len(MOOD_ORDER)), key=lambda i: (-float(vector[i]), i))
    return [MOOD_ORDER[i] for i in order]


def _index_bank(
    question_bank: Iterable[QuestionDefinition] | Mapping[str, QuestionDefinition] | None,
) -> dict[Any, QuestionDefinition]:
    if question_bank is None:
        return {}
    if isinstance(question_bank, Mapping):
        return dict(question_bank)
    return {
        q.question_id: q
        for q in question_bank
        if getattr(q, "question_id", None) is not None
    }


def _magnitude(value: Any) -> float:
    """Return how strongly a single answer applies its question's weights."""
    if isinstance(value, bool):
        return 1.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 1.0
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return 1.0
        return parsed if math.isfinite(parsed) else 1.0
    return 1.0


def _clamp_unit(x: float) -> float:
    return max(0.0, min(1.0, x))
