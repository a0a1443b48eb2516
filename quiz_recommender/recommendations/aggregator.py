"""
Recommendation engine: orchestration only.

``RecommendationEngine.generate()`` reads the registry, normalizes the
stored quiz state, runs the course matcher, book recommender and narrator,
and assembles a ``UnifiedRecommendations`` bundle.  It performs no scoring
of its own; every number comes from the matcher modules.

The bundle is rebuilt from a fresh store read on every call.  ``generate``
never raises for missing, partial or malformed quiz data, unknown labels
or an empty catalog; each of those has a defined fallback.

Usage
-----
    from quiz_recommender.recommendations.aggregator import RecommendationEngine

    engine = RecommendationEngine(default_registry(), store, catalog)
    bundle = engine.generate()
"""

from __future__ import annotations

import logging
from typing import Optional

from quiz_recommender.catalog.loader import CatalogStore
from quiz_recommender.config import EngineConfig
from quiz_recommender.models.quiz import QuizMetadata, QuizResult
from quiz_recommender.models.recommendation import UnifiedRecommendations
from quiz_recommender.quizzes.base import QuizStrategy
from quiz_recommender.quizzes.registry import QuizRegistry
from quiz_recommender.recommendations.book_recommender import recommend_books
from quiz_recommender.recommendations.course_matcher import match_courses
from quiz_recommender.recommendations.narrator import combined_analysis, single_quiz_analysis
from quiz_recommender.recommendations.normalizer import normalize_results
from quiz_recommender.store.key_value import KeyValueStore

logger = logging.getLogger(__name__)

RECOMMENDATIONS_STEP = "recommendations"


class RecommendationEngine:
    """Builds recommendation bundles from a registry, a store and a catalog."""

    def __init__(
        self,
        registry: QuizRegistry,
        store: KeyValueStore,
        catalog: CatalogStore,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.registry = registry
        self.store = store
        self.catalog = catalog
        self.config = config or EngineConfig()

    # ── Extension ────────────────────────────────────────────────────────────

    def register_quiz(
        self,
        metadata: QuizMetadata,
        strategy: Optional[QuizStrategy] = None,
    ) -> None:
        """Add or replace a quiz type.  Takes effect on the next ``generate()``."""
        self.registry.register(metadata, strategy)

    # ── Quiz state ───────────────────────────────────────────────────────────

    def completed_results(self) -> list[QuizResult]:
        return normalize_results(self.registry, self.store)

    def has_quiz_history(self) -> bool:
        return bool(self.completed_results())

    def completion_status(self) -> dict[str, bool]:
        """Registered quiz id -> completed, in priority order."""
        done = {r.quiz_id for r in self.completed_results()}
        return {q.quiz_id: q.quiz_id in done for q in self.registry.list_quizzes()}

    def next_step(self) -> str:
        """Id of the next quiz to take, or ``"recommendations"`` once all are done."""
        nxt = self._next_quiz({r.quiz_id for r in self.completed_results()})
        return nxt.quiz_id if nxt else RECOMMENDATIONS_STEP

    def _next_quiz(self, completed_ids: set[str]) -> Optional[QuizMetadata]:
        for quiz in self.registry.list_quizzes():
            if quiz.quiz_id not in completed_ids:
                return quiz
        return None

    # ── Bundle ───────────────────────────────────────────────────────────────

    def generate(self) -> UnifiedRecommendations:
        """Build a fresh recommendation bundle from the current store contents."""
        results = self.completed_results()
        next_quiz = self._next_quiz({r.quiz_id for r in results})

        courses = match_courses(
            results, self.catalog.courses(), self.registry,
            config=self.config, limit=self.config.max_courses,
        )
        books = recommend_books(
            results, self.catalog.books(), self.registry
        )[: self.config.max_books]

        bundle = UnifiedRecommendations(
            next_quiz=next_quiz,
            courses=tuple(courses),
            books=tuple(books),
            analysis=single_quiz_analysis(results, self.registry),
            combined_analysis=combined_analysis(results, self.registry),
            has_history=bool(results),
        )

        logger.info(
            "Recommendations generated: %d/%d quizzes completed, %d courses, %d books, next quiz=%s",
            len(results), len(self.registry), len(bundle.courses), len(bundle.books),
            next_quiz.quiz_id if next_quiz else "none",
            extra={
                "completed_quizzes": [r.quiz_id for r in results],
                "next_quiz": next_quiz.quiz_id if next_quiz else None,
            },
        )
        return bundle


def generate_unified_recommendations(
    registry: QuizRegistry,
    store: KeyValueStore,
    catalog: CatalogStore,
    config: Optional[EngineConfig] = None,
) -> UnifiedRecommendations:
    """One-shot convenience wrapper around ``RecommendationEngine.generate()``."""
    return RecommendationEngine(registry, store, catalog, config).generate()
