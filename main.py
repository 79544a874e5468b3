"""Entry point: wires all components and runs a sample mood session."""

from __future__ import annotations

import asyncio
import logging

import config
from moodreco.catalogue import CatalogueSource, InMemoryCatalogue
from moodreco.engine import RecommendationEngine
from moodreco.models import InteractionResponse, Movie
from moodreco.mood_analyzer import MoodAnalyzer
from moodreco.questions import DEFAULT_QUESTIONS, color_payload, word_payload
from moodreco.scorer import MovieMatchScorer
from moodreco.service import MoodRecommenderService
from moodreco.session import InMemoryFavorites, MoodHistory
from moodreco.tmdb import TMDBCatalogue

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Offline catalogue used when no TMDB key is configured
# ---------------------------------------------------------------------------

SAMPLE_MOVIES: list[Movie] = [
    Movie(603, "The Matrix", 1999, ("Action", "Science Fiction"), "en", 8.2, 26000),
    Movie(13, "Forrest Gump", 1994, ("Comedy", "Drama", "Romance"), "en", 8.5, 27000),
    Movie(129, "Spirited Away", 2001, ("Animation", "Family", "Fantasy"), "ja", 8.5, 16000),
    Movie(194, "Amélie", 2001, ("Comedy", "Romance"), "fr", 7.9, 11000),
    Movie(27205, "Inception", 2010, ("Action", "Science Fiction", "Adventure"), "en", 8.4, 36000),
    Movie(11216, "Cinema Paradiso", 1988, ("Drama", "Romance"), "it", 8.4, 4300),
    Movie(496243, "Parasite", 2019, ("Comedy", "Thriller", "Drama"), "ko", 8.5, 18000),
    Movie(120467, "The Grand Budapest Hotel", 2014, ("Comedy", "Drama"), "en", 8.0, 15000),
    Movie(1124, "The Prestige", 2006, ("Drama", "Mystery", "Science Fiction"), "en", 8.2, 16000),
    Movie(8392, "My Neighbor Totoro", 1988, ("Fantasy", "Animation", "Family"), "ja", 8.1, 8000),
    Movie(419430, "Get Out", 2017, ("Mystery", "Thriller", "Horror"), "en", 7.6, 17000),
    Movie(152601, "Her", 2013, ("Romance", "Science Fiction", "Drama"), "en", 7.9, 14000),
]


def build_catalogue() -> CatalogueSource:
    """Return the TMDB catalogue if configured, else the offline sample."""
    if config.TMDB_API_KEY:
        logger.info("Using TMDB catalogue at %s", config.TMDB_BASE_URL)
        return TMDBCatalogue(
            api_key=config.TMDB_API_KEY,
            base_url=config.TMDB_BASE_URL,
            timeout=config.TMDB_TIMEOUT_SECONDS,
            ui_language=config.TMDB_UI_LANGUAGE,
        )
    logger.info("TMDB_API_KEY not set; using the in-memory sample catalogue.")
    return InMemoryCatalogue(SAMPLE_MOVIES)


def build_service(catalogue: CatalogueSource) -> MoodRecommenderService:
    """Construct the service with all dependencies wired.

    Args:
        catalogue: Source of candidate movies.

    Returns:
        A ready :class:`~moodreco.service.MoodRecommenderService`.
    """
    analyzer = MoodAnalyzer(
        max_secondary=config.MAX_SECONDARY_MOODS,
        secondary_threshold=config.SECONDARY_MOOD_THRESHOLD,
    )
    engine = RecommendationEngine(
        catalogue=catalogue,
        scorer=MovieMatchScorer(jitter=config.SCORE_JITTER),
    )
    return MoodRecommenderService(
        analyzer=analyzer,
        engine=engine,
        question_bank=DEFAULT_QUESTIONS,
        favorites=InMemoryFavorites(),
        history=MoodHistory(max_entries=config.MOOD_HISTORY_SIZE),
        warn_threshold_ms=config.RECOMMENDATION_WARN_THRESHOLD_MS,
    )


async def run_demo() -> None:
    """Play one scripted puzzle session and print the recommendations."""
    service = build_service(build_catalogue())

    service.submit_response(InteractionResponse("energy", 8, elapsed_ms=2100))
    service.submit_response(
        InteractionResponse("colors", color_payload(["#FF6B6B", "#54A0FF", "#00D2D3"]), 4200)
    )
    service.submit_response(
        InteractionResponse("words", word_payload(["journey", "fireworks", "secret"]), 3800)
    )
    service.submit_response(InteractionResponse("weekend", "hike", elapsed_ms=1500))

    analysis = service.complete_session()
    print(f"Primary mood: {analysis.primary_mood.value} "
          f"(confidence {analysis.confidence:.2f})")
    print(f"Secondary moods: {', '.join(m.value for m in analysis.secondary_moods) or '-'}")
    print(f"Tags: {', '.join(analysis.tags)}")

    result = await service.generate_recommendations(
        analysis,
        service.last_responses,
        config.DEFAULT_LANGUAGES,
        config.DEFAULT_LIMIT,
    )
    if not result.ok:
        print(f"Error: {result.error}")
        return
    for rec in result.recommendations:
        print(f"{rec.match_score:3d}  {rec.movie.title} ({rec.movie.year}) - {rec.reason}")


def main() -> None:
    """Run the demo session."""
    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
