"""Genre affinity signals: how well a movie's genres fit the inferred moods."""

from __future__ import annotations

import logging

from moodreco.mood_table import AFFINITY_DEPTH, genre_overlap
from moodreco.models import AuxSignals, Movie, MoodAnalysis
from moodreco.signals.base import ScoreSignal

logger = logging.getLogger(__name__)


class GenreAffinitySignal(ScoreSignal):
    """Rewards genres that sit near the top of a mood's affinity list.

    With ``secondary=False`` only the primary mood is considered; with
    ``secondary=True`` matches are summed across every secondary mood.
    Only the first *top_n* genres of a mood's list count, so distant
    associations are not rewarded.

    Args:
        per_match: Points per matching genre.
        cap: Maximum total contribution.
        secondary: Score against secondary moods instead of the primary.
        top_n: Affinity-list depth that still counts as a match.
    """

    def __init__(
        self,
        per_match: float,
        cap: float,
        secondary: bool = False,
        top_n: int = AFFINITY_DEPTH,
    ) -> None:
        self._per_match = per_match
        self._cap = cap
        self._secondary = secondary
        self._top_n = top_n

    def contribute(self, movie: Movie, analysis: MoodAnalysis, aux: AuxSignals) -> float:
        moods = analysis.secondary_moods if self._secondary else (analysis.primary_mood,)
        matches = sum(genre_overlap(movie.genres, mood, self._top_n) for mood in moods)
        return min(matches * self._per_match, self._cap)


class ObservedMoodSignal(ScoreSignal):
    """Rewards movies that fit moods the user picked directly in minigames.

    Every observed occurrence of a mood whose top genres include one of
    the movie's genres adds *per_occurrence* points.

    Args:
        per_occurrence: Points per observed occurrence.
        cap: Maximum total contribution.
        top_n: Affinity-list depth that still counts as a match.
    """

    def __init__(
        self,
        per_occurrence: float = 2.0,
        cap: float = 10.0,
        top_n: int = AFFINITY_DEPTH,
    ) -> None:
        self._per_occurrence = per_occurrence
        self._cap = cap
        self._top_n = top_n

    def contribute(self, movie: Movie, analysis: MoodAnalysis, aux: AuxSignals) -> float:
        points = 0.0
        for mood, count in aux.observed_moods.items():
            if genre_overlap(movie.genres, mood, self._top_n) > 0:
                points += count * self._per_occurrence
        return min(points, self._cap)
