"""Recommendation engine: fetches candidates, scores them and ranks the result."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Collection, Iterable, Sequence

from moodreco.catalogue import CatalogueSource, CatalogueUnavailableError
from moodreco.mood_table import genre_ids_for_mood
from moodreco.models import (
    AuxSignals,
    InteractionResponse,
    Mood,
    Movie,
    MoodAnalysis,
    MovieRecommendation,
)
from moodreco.scorer import MovieMatchScorer

logger = logging.getLogger(__name__)

ALL_LANGUAGES = "all"

# Genres taken per mood when deriving candidates
_PRIMARY_GENRES = 3
_SECONDARY_GENRES = 2
_OBSERVED_GENRES = 2
_OBSERVED_MOODS = 3


class RecommendationEngine:
    """Turns a mood analysis into an ordered, capped list of recommendations.

    Pipeline:

    1. Derive up to *max_genres* candidate genres from the analysis and the
       moods observed directly in structured responses.
    2. Fetch the first *genres_per_language* genres for every requested
       language concurrently, together with the popular and top-rated lists.
    3. Merge and de-duplicate by movie id (first occurrence wins).
    4. Apply the language filter and drop excluded (favorite) ids.
    5. Optionally replace the first ``2 * limit`` candidates with their
       detail records.
    6. Score every survivor, stable-sort by descending score, truncate.

    A failing genre fetch is logged and contributes nothing.  If both the
    popular and the top-rated fetch fail,
    :class:`~moodreco.catalogue.CatalogueUnavailableError` is raised.

    Mood labels given as plain strings are resolved to :class:`Mood`; an
    unknown primary mood falls back to *fallback_mood*.

    Args:
        catalogue: Source of candidate movies.
        scorer: Scores and annotates each candidate.
        max_genres: Cap on candidate genres.
        genres_per_language: Genres fetched per requested language.
        page: Result page requested from the catalogue.
        enrich_details: Re-fetch candidates through
            :meth:`~moodreco.catalogue.CatalogueSource.fetch_details` before
            scoring.
        fallback_mood: Primary mood used when the analysis names an unknown
            one.
    """

    def __init__(
        self,
        catalogue: CatalogueSource,
        scorer: MovieMatchScorer,
        max_genres: int = 5,
        genres_per_language: int = 3,
        page: int = 1,
        enrich_details: bool = False,
        fallback_mood: Mood = Mood.HAPPY,
    ) -> None:
        self._catalogue = catalogue
        self._scorer = scorer
        self._max_genres = max_genres
        self._genres_per_language = genres_per_language
        self._page = page
        self._enrich_details = enrich_details
        self._fallback_mood = fallback_mood

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    async def generate_recommendations(
        self,
        analysis: MoodAnalysis,
        responses: Sequence[InteractionResponse],
        languages: Iterable[str],
        limit: int,
        exclude_ids: Collection[int] = frozenset(),
    ) -> list[MovieRecommendation]:
        """Return at most *limit* recommendations, best first.

        Args:
            analysis: The user's mood analysis.
            responses: The response set the analysis was built from.
            languages: ISO 639-1 codes to keep; empty or ``["all"]`` keeps
                every language.
            limit: Maximum number of results.  ``0`` returns ``[]``.
            exclude_ids: Movie ids to leave out (the user's favorites).

        Returns:
            Recommendations sorted by non-increasing ``match_score``.

        Raises:
            ValueError: If *limit* is negative.
            CatalogueUnavailableError: If neither fallback fetch succeeded.
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit!r}")
        if limit == 0:
            return []

        analysis = self.normalize_analysis(analysis)
        aux = AuxSignals.from_responses(responses)
        language_filter = normalize_languages(languages)
        genre_ids = self.candidate_genre_ids(analysis, aux)
        logger.debug(
            "Candidate genres for mood %s: %s (languages=%s)",
            analysis.primary_mood.value,
            genre_ids,
            sorted(language_filter) if language_filter else "all",
        )

        candidates = await self._fetch_candidates(genre_ids, language_filter)
        candidates = filter_candidates(candidates, language_filter, exclude_ids)
        if self._enrich_details:
            candidates = await self._with_details(candidates, 2 * limit)

        recommendations = []
        for movie in candidates:
            result = self._scorer.score(movie, analysis, aux)
            recommendations.append(
                MovieRecommendation(movie=movie, match_score=result.score, reason=result.reason)
            )
        recommendations.sort(key=lambda r: r.match_score, reverse=True)

        logger.info(
            "Scored %d candidates for mood %s; returning %d.",
            len(recommendations),
            analysis.primary_mood.value,
            min(limit, len(recommendations)),
        )
        return recommendations[:limit]

    def normalize_analysis(self, analysis: MoodAnalysis) -> MoodAnalysis:
        """Return *analysis* with its mood labels resolved to :class:`Mood`.

        Unknown secondary labels are dropped; an unknown primary label is
        replaced by the fallback mood.
        """
        primary = Mood.parse(analysis.primary_mood)
        if primary is None:
            logger.debug(
                "Unknown primary mood %r; using %s.",
                analysis.primary_mood,
                self._fallback_mood.value,
            )
            primary = self._fallback_mood
        secondary = []
        for label in analysis.secondary_moods or ():
            mood = Mood.parse(label)
            if mood is not None and mood != primary and mood not in secondary:
                secondary.append(mood)
        return replace(analysis, primary_mood=primary, secondary_moods=tuple(secondary))

    def candidate_genre_ids(self, analysis: MoodAnalysis, aux: AuxSignals) -> list[int]:
        """Return the de-duplicated genre ids to fetch, most relevant first.

        Takes the primary mood's top 3 genres, the first secondary mood's
        top 2, and the top 2 of each of the three most frequently observed
        moods.
        """
        genre_ids = genre_ids_for_mood(analysis.primary_mood, _PRIMARY_GENRES)
        if analysis.secondary_moods:
            genre_ids += genre_ids_for_mood(analysis.secondary_moods[0], _SECONDARY_GENRES)
        for mood in aux.top_observed(_OBSERVED_MOODS):
            genre_ids += genre_ids_for_mood(mood, _OBSERVED_GENRES)
        return list(dict.fromkeys(genre_ids))[: self._max_genres]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch_candidates(
        self, genre_ids: list[int], language_filter: set[str]
    ) -> list[Movie]:
        """Fan out all catalogue requests and merge their results.

        Results keep fetch order: genre queries first, then popular, then
        top-rated.
        """
        fetch_languages: list[str | None] = sorted(language_filter) or [None]
        requests: list[tuple[str, Awaitable[list[Movie]]]] = []
        for language in fetch_languages:
            for genre_id in genre_ids[: self._genres_per_language]:
                requests.append((
                    f"genre={genre_id} language={language or 'any'}",
                    self._catalogue.fetch_by_genre(genre_id, language, self._page),
                ))
        requests.append(("popular", self._catalogue.fetch_popular(self._page)))
        requests.append(("top_rated", self._catalogue.fetch_top_rated(self._page)))

        results = await asyncio.gather(
            *(coro for _, coro in requests), return_exceptions=True
        )

        movies: list[Movie] = []
        failed: list[str] = []
        for (label, _), result in zip(requests, results):
            if isinstance(result, Exception):
                logger.warning("Catalogue fetch %s failed: %s", label, result)
                failed.append(label)
                continue
            if isinstance(result, BaseException):
                raise result
            movies.extend(result)

        if "popular" in failed and "top_rated" in failed:
            raise CatalogueUnavailableError(
                "Failed to load recommendations: catalogue unreachable."
            )
        return dedupe_movies(movies)

    async def _with_details(self, movies: list[Movie], count: int) -> list[Movie]:
        """Replace the first *count* movies with their detail records.

        A movie whose detail fetch fails or returns nothing is kept as is.
        """
        head = movies[:count]
        results = await asyncio.gather(
            *(self._catalogue.fetch_details(m.movie_id) for m in head),
            return_exceptions=True,
        )
        enriched = []
        for movie, result in zip(head, results):
            if isinstance(result, Exception):
                logger.warning("Detail fetch for movie %d failed: %s", movie.movie_id, result)
                enriched.append(movie)
            elif isinstance(result, BaseException):
                raise result
            elif isinstance(result, Movie):
                enriched.append(result)
            else:
                enriched.append(movie)
        return enriched + movies[count:]


def normalize_languages(languages: Iterable[str] | None) -> set[str]:
    """Return the active language filter, or an empty set for "any language".

    Codes are lower-cased; blank entries are ignored and the ``"all"``
    sentinel disables filtering.
    """
    codes = {code.strip().lower() for code in languages or () if code and code.strip()}
    if ALL_LANGUAGES in codes:
        return set()
    return codes


def dedupe_movies(movies: Iterable[Movie]) -> list[Movie]:
    """Drop repeated movie ids, keeping the first occurrence."""
    seen: set[int] = set()
    unique = []
    for movie in movies:
        if movie.movie_id in seen:
            continue
        seen.add(movie.movie_id)
        unique.append(movie)
    return unique


def filter_candidates(
    movies: Iterable[Movie],
    language_filter: set[str],
    exclude_ids: Collection[int],
) -> list[Movie]:
    """Apply the language filter and remove excluded ids, preserving order."""
    return [
        m for m in movies
        if (not language_filter or m.language.lower() in language_filter)
        and m.movie_id not in exclude_ids
    ]
