"""Abstract base class for all score signals."""

from __future__ import annotations

from abc import ABC, abstractmethod

from moodreco.models import AuxSignals, Movie, MoodAnalysis


class ScoreSignal(ABC):
    """One additive contribution to a movie's match score.

    The :class:`~moodreco.scorer.MovieMatchScorer` sums the contributions of
    every configured signal on top of a neutral base score.  Signals are
    independent of each other, so their order does not matter, and each
    applies its own cap where one is documented.
    """

    @abstractmethod
    def contribute(
        self,
        movie: Movie,
        analysis: MoodAnalysis,
        aux: AuxSignals,
    ) -> float:
        """Return the points this signal adds for *movie*.

        Args:
            movie: The candidate being scored.
            analysis: The user's current mood analysis.
            aux: Behavioural side-channels from the response set.

        Returns:
            A non-negative number of points.
        """
