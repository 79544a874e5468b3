"""Session state: the active response set, mood history and favorites."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable

from moodreco.models import MOOD_ORDER, InteractionResponse, Mood, MoodAnalysis

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 50


class PuzzleSession:
    """Accumulates the responses of one puzzle flow.

    Responses are immutable once recorded; :attr:`responses` hands out a
    tuple snapshot so callers never see later submissions.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._responses: list[InteractionResponse] = []

    @property
    def responses(self) -> tuple[InteractionResponse, ...]:
        with self._lock:
            return tuple(self._responses)

    def submit_response(self, response: InteractionResponse) -> None:
        """Append *response* to the active response set.

        Raises:
            ValueError: If *response* has no string question id.
        """
        question_id = getattr(response, "question_id", None)
        if not isinstance(question_id, str) or not question_id:
            raise ValueError(
                f"response.question_id must be a non-empty string, got {question_id!r}"
            )
        with self._lock:
            self._responses.append(response)

    def completion_percentage(self, total_questions: int) -> float:
        """Share of *total_questions* answered so far, in [0, 100]."""
        if total_questions <= 0:
            return 0.0
        with self._lock:
            answered = len({r.question_id for r in self._responses})
        return min(100.0, 100.0 * answered / total_questions)

    def reset(self) -> tuple[InteractionResponse, ...]:
        """Clear the session and return the responses it held."""
        with self._lock:
            completed = tuple(self._responses)
            self._responses = []
        return completed


@dataclass
class MoodTrends:
    """Summary of recent mood history.

    Attributes:
        total_entries: Analyses inside the window.
        dominant_mood: Most frequent primary mood, ``None`` if no entries.
        mood_distribution: Count of each primary mood.
        average_confidence: Mean confidence, ``0.0`` if no entries.
    """

    total_entries: int = 0
    dominant_mood: Mood | None = None
    mood_distribution: dict[Mood, int] = field(default_factory=dict)
    average_confidence: float = 0.0


class MoodHistory:
    """Bounded append-only log of mood analyses, newest first.

    When full, the oldest analysis is dropped.  The log has a single
    writer (the service completing a session) but reads may come from
    anywhere, so access is locked.

    Args:
        max_entries: Number of analyses retained.
    """

    def __init__(self, max_entries: int = DEFAULT_HISTORY_SIZE) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries!r}")
        self._lock = threading.RLock()
        self._entries: deque[MoodAnalysis] = deque(maxlen=max_entries)

    def append(self, analysis: MoodAnalysis) -> None:
        with self._lock:
            self._entries.appendleft(analysis)

    def entries(self) -> list[MoodAnalysis]:
        """Return all retained analyses, most recent first."""
        with self._lock:
            return list(self._entries)

    def latest(self) -> MoodAnalysis | None:
        with self._lock:
            return self._entries[0] if self._entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def trends(self, now: datetime | None = None, days: int = 30) -> MoodTrends:
        """Summarise the analyses recorded in the last *days* days.

        The dominant mood is the most frequent primary mood; ties go to
        the earlier :class:`Mood` member.
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(days=days)
        recent = [a for a in self.entries() if a.created_at >= cutoff]
        if not recent:
            return MoodTrends()

        counts = Counter(a.primary_mood for a in recent)
        dominant = min(counts, key=lambda m: (-counts[m], MOOD_ORDER.index(m)))
        return MoodTrends(
            total_entries=len(recent),
            dominant_mood=dominant,
            mood_distribution=dict(counts),
            average_confidence=sum(a.confidence for a in recent) / len(recent),
        )


class FavoriteSet(ABC):
    """Read contract for the user's favorite movies.

    The recommendation path only ever reads favorites, taking a single
    :meth:`ids` snapshot per request.
    """

    @abstractmethod
    def contains(self, movie_id: int) -> bool:
        """Return ``True`` if *movie_id* is a favorite."""

    @abstractmethod
    def ids(self) -> frozenset[int]:
        """Return a snapshot of all favorite movie ids."""


class InMemoryFavorites(FavoriteSet):
    """A simple in-process :class:`FavoriteSet`."""

    def __init__(self, movie_ids: Iterable[int] = ()) -> None:
        self._lock = threading.RLock()
        self._ids: set[int] = set(movie_ids)

    def contains(self, movie_id: int) -> bool:
        with self._lock:
            return movie_id in self._ids

    def ids(self) -> frozenset[int]:
        with self._lock:
            return frozenset(self._ids)

    def add(self, movie_id: int) -> None:
        with self._lock:
            self._ids.add(movie_id)

    def remove(self, movie_id: int) -> None:
        """Remove *movie_id*; unknown ids are ignored."""
        with self._lock:
            self._ids.discard(movie_id)

    def clear(self) -> None:
        with self._lock:
            self._ids.clear()
