"""Service facade: the entry point used by the puzzle flow and the UI."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Sequence

from moodreco.catalogue import CatalogueUnavailableError
from moodreco.engine import RecommendationEngine
from moodreco.mood_analyzer import MoodAnalyzer
from moodreco.models import (
    InteractionResponse,
    MoodAnalysis,
    QuestionDefinition,
    RecommendationResult,
)
from moodreco.session import FavoriteSet, MoodHistory, PuzzleSession

logger = logging.getLogger(__name__)

_RECOMMENDATION_WARN_THRESHOLD_MS = 2000.0
_GENERIC_ERROR = "Failed to generate recommendations."


class MoodRecommenderService:
    """Wires the mood analyzer, recommendation engine and session state.

    Collaborators are injected so the service can be driven without a UI
    runtime.  No exception escapes :meth:`generate_recommendations`;
    failures are reported through
    :attr:`~moodreco.models.RecommendationResult.error`.

    Args:
        analyzer: Builds mood analyses from response sets.
        engine: Produces recommendations for an analysis.
        question_bank: Questions the puzzle flow can ask.
        favorites: The user's favorites, used as an exclusion filter.
        history: Bounded log that completed analyses are appended to.
        warn_threshold_ms: Log a warning when a recommendation request
            takes longer than this.
    """

    def __init__(
        self,
        analyzer: MoodAnalyzer,
        engine: RecommendationEngine,
        question_bank: Sequence[QuestionDefinition],
        favorites: FavoriteSet,
        history: MoodHistory,
        warn_threshold_ms: float = _RECOMMENDATION_WARN_THRESHOLD_MS,
    ) -> None:
        self._analyzer = analyzer
        self._engine = engine
        self._question_bank = list(question_bank)
        self._favorites = favorites
        self._history = history
        self._warn_threshold_ms = warn_threshold_ms
        self._session = PuzzleSession()
        self._last_responses: tuple[InteractionResponse, ...] = ()

    # ------------------------------------------------------------------
    # Puzzle flow
    # ------------------------------------------------------------------

    @property
    def responses(self) -> tuple[InteractionResponse, ...]:
        """Responses submitted to the active session so far."""
        return self._session.responses

    @property
    def last_responses(self) -> tuple[InteractionResponse, ...]:
        """The response set of the most recently completed session."""
        return self._last_responses

    @property
    def completion_percentage(self) -> float:
        return self._session.completion_percentage(len(self._question_bank))

    def submit_response(self, response: InteractionResponse) -> None:
        """Add *response* to the active response set.

        A response without a non-empty string question id is logged and
        dropped.
        """
        try:
            self._session.submit_response(response)
        except ValueError as exc:
            logger.warning("Dropping response: %s", exc)
            return
        logger.debug("Recorded response for question %r.", response.question_id)

    def complete_session(self) -> MoodAnalysis:
        """Analyse the active response set and start a fresh session.

        The analysis is appended to the mood history and the completed
        responses remain available as :attr:`last_responses`.

        Returns:
            The new :class:`~moodreco.models.MoodAnalysis`.
        """
        responses = self._session.reset()
        analysis = self._analyzer.analyze(responses, self._question_bank)
        self._history.append(analysis)
        self._last_responses = responses
        logger.info(
            "Session complete: %d responses, primary mood %s (confidence %.2f%s).",
            len(responses),
            analysis.primary_mood.value,
            analysis.confidence,
            "" if analysis.has_signal else ", no signal",
        )
        return analysis

    def get_mood_history(self) -> list[MoodAnalysis]:
        """Return past analyses, most recent first."""
        return self._history.entries()

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    async def generate_recommendations(
        self,
        analysis: MoodAnalysis,
        responses: Sequence[InteractionResponse],
        languages: Iterable[str],
        limit: int,
    ) -> RecommendationResult:
        """Return recommendations for *analysis*, excluding favorites.

        Args:
            analysis: The mood analysis to recommend for.
            responses: The response set behind *analysis*.
            languages: Language codes to keep (``["all"]`` for any).
            limit: Maximum number of recommendations.

        Returns:
            A :class:`~moodreco.models.RecommendationResult`; ``error`` is set
            when the catalogue is unreachable or the arguments are invalid.
        """
        favorite_ids = self._favorites.ids()
        start_ms = time.monotonic() * 1000
        try:
            recommendations = await self._engine.generate_recommendations(
                analysis,
                responses,
                languages,
                limit,
                exclude_ids=favorite_ids,
            )
        except CatalogueUnavailableError as exc:
            logger.error("Recommendations unavailable: %s", exc)
            return RecommendationResult(error=str(exc))
        except ValueError as exc:
            return RecommendationResult(error=str(exc))
        except Exception:
            logger.exception(
                "Unexpected error generating recommendations for mood %s",
                getattr(analysis.primary_mood, "value", analysis.primary_mood),
            )
            return RecommendationResult(error=_GENERIC_ERROR)
        finally:
            elapsed_ms = time.monotonic() * 1000 - start_ms
            if elapsed_ms > self._warn_threshold_ms:
                logger.warning(
                    "generate_recommendations took %.1fms (threshold %.0fms)",
                    elapsed_ms,
                    self._warn_threshold_ms,
                )
            else:
                logger.debug("generate_recommendations took %.1fms", elapsed_ms)

        return RecommendationResult(recommendations=recommendations)
