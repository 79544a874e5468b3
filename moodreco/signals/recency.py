"""Recency signal: small boost for recent releases."""

from __future__ import annotations

from datetime import date

from moodreco.models import AuxSignals, Movie, MoodAnalysis
from moodreco.signals.base import ScoreSignal


class RecencySignal(ScoreSignal):
    """Boosts movies released within the last few years.

    Args:
        current_year: Reference year.  Defaults to today's year, looked up
            on each call.
        recent_years: Window for the full bonus.
        recent_bonus: Points for releases within *recent_years*.
        fresh_years: Wider window for the smaller bonus.
        fresh_bonus: Points for releases within *fresh_years*.
    """

    def __init__(
        self,
        current_year: int | None = None,
        recent_years: int = 2,
        recent_bonus: float = 6.0,
        fresh_years: int = 5,
        fresh_bonus: float = 3.0,
    ) -> None:
        self._current_year = current_year
        self._recent_years = recent_years
        self._recent_bonus = recent_bonus
        self._fresh_years = fresh_years
        self._fresh_bonus = fresh_bonus

    def contribute(self, movie: Movie, analysis: MoodAnalysis, aux: AuxSignals) -> float:
        if not movie.year:
            return 0.0
        this_year = self._current_year or date.today().year
        if movie.year >= this_year - self._recent_years:
            return self._recent_bonus
        if movie.year >= this_year - self._fresh_years:
            return self._fresh_bonus
        return 0.0
