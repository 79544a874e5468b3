"""Movie catalogue sources: the abstract contract and an in-memory source."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Iterable

from moodreco.mood_table import GENRE_NAMES, mood_tags_for_genres
from moodreco.models import Movie

logger = logging.getLogger(__name__)


class CatalogueError(RuntimeError):
    """A catalogue request failed or timed out."""


class CatalogueUnavailableError(CatalogueError):
    """None of the fallback catalogue requests succeeded."""


class CatalogueSource(ABC):
    """Asynchronous source of candidate movies.

    Implementations return already-normalized :class:`~moodreco.models.Movie`
    records and raise :class:`CatalogueError` when a request fails.  They
    are expected to enforce their own request timeout.
    """

    @abstractmethod
    async def fetch_popular(self, page: int = 1) -> list[Movie]:
        """Return currently popular movies."""

    @abstractmethod
    async def fetch_top_rated(self, page: int = 1) -> list[Movie]:
        """Return the highest-rated movies."""

    @abstractmethod
    async def fetch_by_genre(
        self, genre_id: int, language: str | None = None, page: int = 1
    ) -> list[Movie]:
        """Return popular movies in *genre_id*, optionally in *language*.

        Args:
            genre_id: TMDB genre id.
            language: ISO 639-1 original-language filter; ``None`` for any.
            page: 1-based result page.
        """

    @abstractmethod
    async def search(self, query: str, language: str | None = None) -> list[Movie]:
        """Return movies whose title matches *query*."""

    @abstractmethod
    async def fetch_details(self, movie_id: int) -> Movie | None:
        """Return one movie by id, or ``None`` if it does not exist."""


class InMemoryCatalogue(CatalogueSource):
    """A :class:`CatalogueSource` over a fixed list of movies.

    Used for tests and as the offline fallback when no API key is
    configured.  Popular ordering is by vote count, top-rated by rating;
    ties keep insertion order.  Movies without mood tags get tags derived
    from their genres on insertion.

    Args:
        movies: Initial catalogue contents.
        page_size: Number of movies per result page.
    """

    def __init__(self, movies: Iterable[Movie] = (), page_size: int = 20) -> None:
        self._lock = threading.RLock()
        self._movies: dict[int, Movie] = {}
        self._page_size = page_size
        self.add_movies(movies)

    # ------------------------------------------------------------------
    # Catalogue management
    # ------------------------------------------------------------------

    def add_movies(self, movies: Iterable[Movie]) -> None:
        """Insert or replace movies by id."""
        with self._lock:
            for movie in movies:
                if not movie.mood_tags:
                    movie = _with_derived_tags(movie)
                self._movies[movie.movie_id] = movie
            logger.debug("In-memory catalogue holds %d movies.", len(self._movies))

    def get_all_movies(self) -> list[Movie]:
        """Return a snapshot of every movie, in insertion order."""
        with self._lock:
            return list(self._movies.values())

    # ------------------------------------------------------------------
    # CatalogueSource
    # ------------------------------------------------------------------

    async def fetch_popular(self, page: int = 1) -> list[Movie]:
        movies = sorted(self.get_all_movies(), key=lambda m: m.vote_count, reverse=True)
        return self._page(movies, page)

    async def fetch_top_rated(self, page: int = 1) -> list[Movie]:
        movies = sorted(self.get_all_movies(), key=lambda m: m.rating, reverse=True)
        return self._page(movies, page)

    async def fetch_by_genre(
        self, genre_id: int, language: str | None = None, page: int = 1
    ) -> list[Movie]:
        genre = GENRE_NAMES.get(genre_id)
        if genre is None:
            return []
        movies = [
            m for m in self.get_all_movies()
            if genre in m.genres
            and (language is None or m.language.lower() == language.lower())
        ]
        movies.sort(key=lambda m: m.vote_count, reverse=True)
        return self._page(movies, page)

    async def search(self, query: str, language: str | None = None) -> list[Movie]:
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            m for m in self.get_all_movies()
            if needle in m.title.lower()
            and (language is None or m.language.lower() == language.lower())
        ]

    async def fetch_details(self, movie_id: int) -> Movie | None:
        with self._lock:
            return self._movies.get(movie_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _page(self, movies: list[Movie], page: int) -> list[Movie]:
        start = max(0, page - 1) * self._page_size
        return movies[start : start + self._page_size]


def _with_derived_tags(movie: Movie) -> Movie:
    return replace(movie, mood_tags=mood_tags_for_genres(movie.genres))
