"""
Book recommender: per-quiz picks from the curated book list.

Each completed quiz's strategy names up to two titles for its dominant
trait or archetype.  Picks are merged in priority order and de-duplicated
by title; the first quiz to name a book decides its reason.  When no quiz
named anything, the foundational titles are used instead.

The final list is ordered beginner -> intermediate -> advanced (stable, so
picks of equal difficulty keep merge order) to put accessible material
first regardless of how relevant it is.
"""

from __future__ import annotations

import logging
from typing import Sequence

from quiz_recommender.catalog.books import FOUNDATIONAL_TITLES
from quiz_recommender.models.catalog import Book
from quiz_recommender.models.quiz import QuizResult
from quiz_recommender.models.recommendation import BookRecommendation
from quiz_recommender.quizzes.registry import QuizRegistry
from quiz_recommender.taxonomy.quiz_taxonomy import DIFFICULTY_RANK

logger = logging.getLogger(__name__)


def recommend_books(
    results: Sequence[QuizResult],
    books: Sequence[Book],
    registry: QuizRegistry,
) -> list[BookRecommendation]:
    """Merged, de-duplicated, difficulty-ordered book recommendations."""
    by_title = {b.title: b for b in books}
    picked: dict[str, BookRecommendation] = {}

    for result in results:
        strategy = registry.strategy_for(result.quiz_id)
        for pick in strategy.match_books(result):
            if pick.title in picked:
                continue
            book = by_title.get(pick.title)
            if book is None:
                logger.debug(
                    "Book '%s' is not in the catalog.", pick.title,
                    extra={"quiz_id": result.quiz_id},
                )
                continue
            picked[pick.title] = BookRecommendation.from_book(book, pick.reason)

    if not picked:
        for title in FOUNDATIONAL_TITLES:
            book = by_title.get(title)
            if book is not None:
                picked[title] = BookRecommendation.from_book(book)

    return sorted(picked.values(), key=lambda b: DIFFICULTY_RANK[b.difficulty])
