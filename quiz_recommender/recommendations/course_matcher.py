"""
Course matcher: scores every catalog course against the completed quizzes.

Score
-----
    score(course) = mean over results of strategy.match_course(result, course)

Averaging rather than summing means a second completed quiz dilutes a
course that only one quiz likes instead of inflating it.  Each per-quiz
score is already clamped to [0, 1], so the mean is too.

Selection
---------
  1. Drop courses scoring at or below ``min_score`` (0.1).
  2. Sort descending by score.  ``sorted`` is stable, so equal scores keep
     catalog declaration order.
  3. If fewer than ``fallback_count`` (3) survive, pad with the earliest
     catalog courses not already listed, scored at
     ``min(fallback_score, lowest surviving score)`` so the list stays in
     descending order.  With nothing surviving every entry is a fallback
     at exactly ``fallback_score``.

The full list is returned; the engine truncates.

Reason
------
The first completed quiz (priority order) whose strategy returns a
non-empty reason for the course wins; otherwise ``GENERIC_REASON``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from quiz_recommender.config import EngineConfig
from quiz_recommender.models.catalog import Course
from quiz_recommender.models.quiz import QuizResult
from quiz_recommender.models.recommendation import CourseRecommendation
from quiz_recommender.quizzes.base import TAG_MATCH_WEIGHT
from quiz_recommender.quizzes.registry import QuizRegistry

logger = logging.getLogger(__name__)

GENERIC_REASON = "Complements your spiritual journey"
FALLBACK_REASON = "A foundational course to start your spiritual journey"


def score_course(
    results: Sequence[QuizResult],
    course: Course,
    registry: QuizRegistry,
    tag_weight: float = TAG_MATCH_WEIGHT,
) -> float:
    """Mean per-quiz match score for one course; 0.0 with no results."""
    if not results:
        return 0.0
    total = 0.0
    for result in results:
        strategy = registry.strategy_for(result.quiz_id)
        total += strategy.match_course(result, course, tag_weight=tag_weight)
    return total / len(results)


def course_reason(
    results: Sequence[QuizResult],
    course: Course,
    registry: QuizRegistry,
) -> str:
    for result in results:
        reason = registry.strategy_for(result.quiz_id).reason(result, course)
        if reason:
            return reason
    return GENERIC_REASON


def match_courses(
    results: Sequence[QuizResult],
    courses: Sequence[Course],
    registry: QuizRegistry,
    config: Optional[EngineConfig] = None,
    limit: Optional[int] = None,
) -> list[CourseRecommendation]:
    """Score, filter, order and pad course recommendations.

    Args:
        results:  Completed quiz results in priority order.
        courses:  Catalog courses in declaration order.
        registry: Registry that owns the strategies for ``results``.
        config:   Thresholds and weights; defaults to ``EngineConfig()``.
        limit:    Keep at most this many entries after padding; ``None``
                  keeps them all.

    Returns:
        Every qualifying course, best first, padded with fallback entries
        up to ``config.fallback_course_count`` when the catalog allows.
        An empty catalog yields an empty list.
    """
    config = config or EngineConfig()

    scored: list[tuple[Course, float]] = []
    for course in courses:
        score = score_course(results, course, registry, tag_weight=config.tag_match_weight)
        logger.debug("Course '%s' scored %.3f", course.course_id, score)
        if score > config.min_match_score:
            scored.append((course, score))

    scored.sort(key=lambda cs: -cs[1])

    recs = [
        CourseRecommendation.from_score(course, score, course_reason(results, course, registry))
        for course, score in scored
    ]

    if len(recs) < config.fallback_course_count:
        floor = config.fallback_course_score
        if recs:
            floor = min(floor, recs[-1].match_score)
        listed = {r.course.course_id for r in recs}
        for course in courses:
            if len(recs) >= config.fallback_course_count:
                break
            if course.course_id in listed:
                continue
            recs.append(CourseRecommendation.from_score(course, floor, FALLBACK_REASON))
            listed.add(course.course_id)

    return recs if limit is None else recs[:limit]
