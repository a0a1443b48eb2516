"""
Engine output models.

``UnifiedRecommendations`` is transient: it is rebuilt from fresh store
reads on every ``RecommendationEngine.generate()`` call and never
persisted by the engine itself.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from quiz_recommender.models.catalog import Book, Course
from quiz_recommender.models.quiz import QuizMetadata
from quiz_recommender.taxonomy.quiz_taxonomy import (
    BookCategory,
    BookDifficulty,
    CourseCategory,
    MatchTier,
    classify_category,
    classify_tier,
)


class CourseRecommendation(BaseModel):
    """A scored catalog course.

    ``category`` and ``tier`` are always derived from ``match_score`` with
    the fixed thresholds in ``quiz_taxonomy``; use ``from_score()`` rather
    than passing them by hand.
    """

    model_config = ConfigDict(frozen=True)

    course: Course
    match_score: float
    category: CourseCategory
    tier: MatchTier
    reason: str

    @classmethod
    def from_score(cls, course: Course, score: float, reason: str) -> "CourseRecommendation":
        score = max(0.0, min(1.0, score))
        return cls(
            course=course,
            match_score=score,
            category=classify_category(score),
            tier=classify_tier(score),
            reason=reason,
        )

    @field_validator("match_score")
    @classmethod
    def validate_score_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"match_score must be in [0.0, 1.0], got {v}.")
        return v

    @model_validator(mode="after")
    def validate_classification(self) -> "CourseRecommendation":
        if self.category != classify_category(self.match_score):
            raise ValueError(
                f"category '{self.category}' does not match score {self.match_score}."
            )
        if self.tier != classify_tier(self.match_score):
            raise ValueError(
                f"tier '{self.tier}' does not match score {self.match_score}."
            )
        return self


class BookRecommendation(BaseModel):
    """A curated book picked for the respondent."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    reason: str
    category: BookCategory
    difficulty: BookDifficulty

    @classmethod
    def from_book(cls, book: Book, reason: Optional[str] = None) -> "BookRecommendation":
        return cls(
            title=book.title,
            author=book.author,
            reason=reason or book.reason,
            category=book.category,
            difficulty=book.difficulty,
        )


class UnifiedRecommendations(BaseModel):
    """The engine's complete answer for one request.

    Attributes:
        next_quiz: Highest-priority quiz not yet completed; ``None`` when
            every registered quiz is done.
        courses: Ordered course recommendations (already truncated).
        books: Ordered book recommendations (already truncated).
        analysis: Single-quiz (or top-two summary) analysis text.
        combined_analysis: Blended narrative; present only with >= 2 results.
        has_history: Whether any quiz has been completed.
    """

    model_config = ConfigDict(frozen=True)

    next_quiz: Optional[QuizMetadata] = None
    courses: tuple[CourseRecommendation, ...] = ()
    books: tuple[BookRecommendation, ...] = ()
    analysis: str
    combined_analysis: Optional[str] = None
    has_history: bool = False
