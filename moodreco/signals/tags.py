"""Descriptive tag overlap signal."""

from __future__ import annotations

from moodreco.mood_table import mood_tags_for_genres
from moodreco.models import AuxSignals, Movie, MoodAnalysis
from moodreco.signals.base import ScoreSignal


class TagOverlapSignal(ScoreSignal):
    """Counts shared keywords between a movie's mood tags and the analysis.

    Movies without catalogue-supplied tags get tags derived from their
    genres.

    Args:
        per_overlap: Points per shared tag.
        cap: Maximum total contribution.
    """

    def __init__(self, per_overlap: float = 3.0, cap: float = 12.0) -> None:
        self._per_overlap = per_overlap
        self._cap = cap

    def contribute(self, movie: Movie, analysis: MoodAnalysis, aux: AuxSignals) -> float:
        wanted = {tag.lower() for tag in analysis.tags}
        if not wanted:
            return 0.0
        movie_tags = movie.mood_tags or mood_tags_for_genres(movie.genres)
        overlaps = len({tag.lower() for tag in movie_tags} & wanted)
        return min(overlaps * self._per_overlap, self._cap)
