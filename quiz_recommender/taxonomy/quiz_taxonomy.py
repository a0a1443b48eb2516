"""
Closed vocabularies for the recommendation engine.

Hierarchy
---------
``CourseCategory`` and ``MatchTier`` classify a scored course.
``BookCategory`` and ``BookDifficulty`` describe a curated book.
``Guna`` and ``ShivaArchetype`` are the labels the two shipped quizzes
produce; quizzes registered later may emit any free-form label.

Thresholds
----------
The category and tier cut-offs are fixed constants, not configuration::

    category:  primary   score > 0.7
               secondary score > 0.5
               explore   otherwise

    tier:      perfect   score > 0.8
               high      score > 0.6
               good      otherwise

``DIFFICULTY_RANK`` is the canonical ordering contract for books: every
``BookDifficulty`` must have exactly one rank, and beginner sorts first.

This module has NO imports from any other ``quiz_recommender`` package.
"""

from enum import StrEnum


class CourseCategory(StrEnum):
    """How prominently a course recommendation should be shown."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    EXPLORE = "explore"


class MatchTier(StrEnum):
    """User-facing strength label for a course match."""

    PERFECT = "perfect"
    HIGH = "high"
    GOOD = "good"


class BookCategory(StrEnum):
    """Topical grouping for curated books."""

    PHILOSOPHY = "philosophy"
    PRACTICE = "practice"
    MEDITATION = "meditation"
    SCRIPTURE = "scripture"


class BookDifficulty(StrEnum):
    """Reading difficulty of a curated book."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Guna(StrEnum):
    """The three gunas scored by the Guna Profiler."""

    SATTVA = "sattva"
    """Clarity, wisdom, harmony."""

    RAJAS = "rajas"
    """Activity, passion, drive."""

    TAMAS = "tamas"
    """Stability, grounding, rest."""


class ShivaArchetype(StrEnum):
    """Archetypes with dedicated rules in the Shiva Consciousness quiz."""

    DESTROYER = "The Destroyer"
    YOGI = "The Yogi"
    SAGE = "The Sage"


PRIMARY_THRESHOLD: float = 0.7
SECONDARY_THRESHOLD: float = 0.5
PERFECT_THRESHOLD: float = 0.8
HIGH_THRESHOLD: float = 0.6

DIFFICULTY_RANK: dict[BookDifficulty, int] = {
    BookDifficulty.BEGINNER:     0,
    BookDifficulty.INTERMEDIATE: 1,
    BookDifficulty.ADVANCED:     2,
}


def classify_category(score: float) -> CourseCategory:
    """Map a match score to its ``CourseCategory``."""
    if score > PRIMARY_THRESHOLD:
        return CourseCategory.PRIMARY
    if score > SECONDARY_THRESHOLD:
        return CourseCategory.SECONDARY
    return CourseCategory.EXPLORE


def classify_tier(score: float) -> MatchTier:
    """Map a match score to its ``MatchTier``."""
    if score > PERFECT_THRESHOLD:
        return MatchTier.PERFECT
    if score > HIGH_THRESHOLD:
        return MatchTier.HIGH
    return MatchTier.GOOD
