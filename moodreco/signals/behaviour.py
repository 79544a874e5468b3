"""Response-behaviour signal based on how quickly the user answered."""

from __future__ import annotations

from moodreco.models import AuxSignals, Movie, MoodAnalysis
from moodreco.signals.base import ScoreSignal


class ResponseTimeSignal(ScoreSignal):
    """Flat bonus driven by the mean answer time of the response set.

    Quick answers suggest an engaged, decisive user; very slow ones get a
    smaller alternate bonus.  Without timings the signal contributes 0.

    Args:
        fast_ms: Mean answer time below which *fast_bonus* applies.
        fast_bonus: Points for quick answers.
        slow_ms: Mean answer time above which *slow_bonus* applies.
        slow_bonus: Points for slow answers.
    """

    def __init__(
        self,
        fast_ms: float = 3000.0,
        fast_bonus: float = 5.0,
        slow_ms: float = 8000.0,
        slow_bonus: float = 3.0,
    ) -> None:
        self._fast_ms = fast_ms
        self._fast_bonus = fast_bonus
        self._slow_ms = slow_ms
        self._slow_bonus = slow_bonus

    def contribute(self, movie: Movie, analysis: MoodAnalysis, aux: AuxSignals) -> float:
        mean = aux.mean_elapsed_ms
        if mean is None:
            return 0.0
        if mean < self._fast_ms:
            return self._fast_bonus
        if mean > self._slow_ms:
            return self._slow_bonus
        return 0.0
