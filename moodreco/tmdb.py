"""TMDB-backed catalogue source built on ``httpx``."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable

import httpx

from moodreco.catalogue import CatalogueError, CatalogueSource
from moodreco.mood_table import GENRE_NAMES, mood_tags_for_genres
from moodreco.models import Movie

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"


class TMDBCatalogue(CatalogueSource):
    """Reads movies from The Movie Database v3 API.

    Every request carries the API key and UI language, and is bounded by
    *timeout* seconds.  Transport errors, timeouts, non-2xx responses and
    undecodable bodies raise :class:`~moodreco.catalogue.CatalogueError`;
    callers decide whether that is fatal.

    Args:
        api_key: TMDB v3 API key.
        base_url: API root.
        timeout: Per-request timeout in seconds.
        ui_language: Language used for titles and overviews.
        client: Optional shared ``httpx.AsyncClient`` (e.g. one built on a
            mock transport in tests).  When omitted a short-lived client is
            opened per request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        ui_language: str = "en-US",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base = base_url.rstrip("/")
        self._timeout = timeout
        self._ui_language = ui_language
        self._client = client

    # ------------------------------------------------------------------
    # CatalogueSource
    # ------------------------------------------------------------------

    async def fetch_popular(self, page: int = 1) -> list[Movie]:
        data = await self._get("/movie/popular", {"page": page})
        return _results_to_movies(data)

    async def fetch_top_rated(self, page: int = 1) -> list[Movie]:
        data = await self._get("/movie/top_rated", {"page": page})
        return _results_to_movies(data)

    async def fetch_by_genre(
        self, genre_id: int, language: str | None = None, page: int = 1
    ) -> list[Movie]:
        params: dict[str, Any] = {
            "sort_by": "popularity.desc",
            "with_genres": genre_id,
            "page": page,
        }
        if language:
            params["with_original_language"] = language.lower()
        data = await self._get("/discover/movie", params)
        return _results_to_movies(data)

    async def search(self, query: str, language: str | None = None) -> list[Movie]:
        if not query.strip():
            return []
        data = await self._get(
            "/search/movie",
            {"query": query, "page": 1, "include_adult": False},
        )
        movies = _results_to_movies(data)
        if language:
            movies = [m for m in movies if m.language == language.lower()]
        return movies

    async def fetch_details(self, movie_id: int) -> Movie | None:
        data = await self._get(f"/movie/{movie_id}", {}, allow_missing=True)
        if data is None:
            return None
        movie = _to_movie(data)
        if movie is None:
            raise CatalogueError(f"TMDB returned a malformed record for movie {movie_id}")
        return movie

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    async def discover(
        self,
        genre_ids: Iterable[int] = (),
        language: str | None = None,
        min_rating: float | None = None,
        max_rating: float | None = None,
        year: int | None = None,
        page: int = 1,
    ) -> list[Movie]:
        """Run a filtered discovery query.

        Args:
            genre_ids: Movies must carry all of these genres.
            language: Original-language filter.
            min_rating: Minimum average rating.
            max_rating: Maximum average rating.
            year: Primary release year.
            page: 1-based result page.

        Returns:
            Matching movies, most popular first.
        """
        params: dict[str, Any] = {"sort_by": "popularity.desc", "page": page}
        genre_ids = list(genre_ids)
        if genre_ids:
            params["with_genres"] = ",".join(str(g) for g in genre_ids)
        if language:
            params["with_original_language"] = language.lower()
        if min_rating is not None:
            params["vote_average.gte"] = min_rating
        if max_rating is not None:
            params["vote_average.lte"] = max_rating
        if year is not None:
            params["primary_release_year"] = year
        data = await self._get("/discover/movie", params)
        return _results_to_movies(data)

    async def fetch_genres(self) -> dict[str, int]:
        """Return TMDB's genre list as ``{name: id}``."""
        data = await self._get("/genre/movie/list", {})
        genres = data.get("genres") if isinstance(data, dict) else None
        if not isinstance(genres, list):
            raise CatalogueError("TMDB genre list response has no genres")
        return {
            g["name"]: g["id"]
            for g in genres
            if isinstance(g, dict)
            and isinstance(g.get("name"), str)
            and isinstance(g.get("id"), int)
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get(
        self, path: str, params: dict[str, Any], allow_missing: bool = False
    ) -> Any:
        """Issue a GET and return the decoded JSON body.

        Returns ``None`` for a 404 when *allow_missing* is set.
        """
        url = f"{self._base}{path}"
        query = {"api_key": self._api_key, "language": self._ui_language, **params}
        try:
            if self._client is not None:
                response = await self._client.get(url, params=query, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=query)
            if allow_missing and response.status_code == 404:
                return None
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise CatalogueError(f"TMDB request {path} failed: {exc}") from exc
        except ValueError as exc:
            raise CatalogueError(f"TMDB request {path} returned invalid JSON") from exc


def _results_to_movies(data: Any) -> list[Movie]:
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return []
    movies = []
    for item in results:
        movie = _to_movie(item)
        if movie is not None:
            movies.append(movie)
    return movies


def _to_movie(item: Any) -> Movie | None:
    """Convert one TMDB movie object into a :class:`Movie`.

    Handles both list results (``genre_ids``) and detail objects
    (``genres``).  Returns ``None`` for objects without an id or with
    unusable vote fields.
    """
    if not isinstance(item, dict) or not isinstance(item.get("id"), int):
        logger.debug("Skipping malformed TMDB movie object: %r", item)
        return None

    if isinstance(item.get("genres"), list):
        genres = [g.get("name") for g in item["genres"] if isinstance(g, dict)]
    else:
        genre_ids = item.get("genre_ids")
        genres = [
            GENRE_NAMES.get(gid)
            for gid in (genre_ids if isinstance(genre_ids, list) else [])
            if isinstance(gid, int)
        ]
    genres = tuple(g for g in genres if isinstance(g, str) and g)

    try:
        rating = float(item.get("vote_average") or 0.0)
        vote_count = int(item.get("vote_count") or 0)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Skipping TMDB movie %r with malformed vote fields.", item["id"])
        return None
    if not math.isfinite(rating):
        rating = 0.0

    return Movie(
        movie_id=item["id"],
        title=_text(item.get("title")) or _text(item.get("original_title")),
        year=_release_year(item.get("release_date")),
        genres=genres,
        language=_text(item.get("original_language")).lower(),
        rating=round(rating, 1),
        vote_count=vote_count,
        overview=_text(item.get("overview")),
        poster_path=_text(item.get("poster_path")) or None,
        mood_tags=mood_tags_for_genres(genres),
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _release_year(release_date: Any) -> int | None:
    if not isinstance(release_date, str) or len(release_date) < 4:
        return None
    try:
        return int(release_date[:4])
    except ValueError:
        return None
