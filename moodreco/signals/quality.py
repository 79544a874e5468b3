"""Quality signal: rating plus confidence in that rating."""

from __future__ import annotations

import math

from moodreco.models import AuxSignals, Movie, MoodAnalysis
from moodreco.signals.base import ScoreSignal


class QualitySignal(ScoreSignal):
    """Adds ``rating * per_rating_point`` plus vote-count bonuses.

    A movie with more than *popular_votes* ratings earns *popular_bonus*;
    one with more than *very_popular_votes* earns *very_popular_bonus* on
    top of that.

    Args:
        per_rating_point: Points per rating point (ratings are 0-10).
        popular_votes: First vote-count threshold.
        popular_bonus: Bonus above the first threshold.
        very_popular_votes: Second vote-count threshold.
        very_popular_bonus: Additional bonus above the second threshold.
    """

    def __init__(
        self,
        per_rating_point: float = 2.0,
        popular_votes: int = 1000,
        popular_bonus: float = 3.0,
        very_popular_votes: int = 5000,
        very_popular_bonus: float = 5.0,
    ) -> None:
        self._per_rating_point = per_rating_point
        self._popular_votes = popular_votes
        self._popular_bonus = popular_bonus
        self._very_popular_votes = very_popular_votes
        self._very_popular_bonus = very_popular_bonus

    def contribute(self, movie: Movie, analysis: MoodAnalysis, aux: AuxSignals) -> float:
        rating = movie.rating if isinstance(movie.rating, (int, float)) else 0.0
        if not math.isfinite(rating):
            rating = 0.0
        rating = min(max(rating, 0.0), 10.0)
        points = rating * self._per_rating_point
        votes = movie.vote_count or 0
        if votes > self._popular_votes:
            points += self._popular_bonus
        if votes > self._very_popular_votes:
            points += self._very_popular_bonus
        return points
