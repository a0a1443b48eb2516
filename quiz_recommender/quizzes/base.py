"""
Quiz strategy contract.

Adding a quiz type means adding one ``QuizStrategy`` subclass and
registering it; no scorer, recommender or narrator code changes.

Every strategy answers six questions about its quiz:

    is_complete(payload)        gate: is this stored payload a finished quiz?
    parse(payload, metadata)    payload -> QuizResult variant
    match_course(result, c)     quiz rules + generic tag fallback, in [0, 1]
    match_books(result)         0-2 BookPick entries from the quiz's table
    reason(result, course)      quiz-specific course reason, or None
    describe(result)            single-quiz analysis paragraph

``is_complete`` is the only place a malformed payload is caught.  It
validates against the strategy's ``record_model``; ``parse`` is only ever
called with payloads that passed, so nothing downstream needs its own
error handling.

Generic tag fallback
--------------------
    tag_score = tag_weight * (tags found in course.searchable_text / len(tags))

with ``tag_weight = 0.5`` unless the engine config overrides it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Optional

from pydantic import BaseModel, ValidationError

from quiz_recommender.models.catalog import Course
from quiz_recommender.models.quiz import QuizMetadata, QuizResult

logger = logging.getLogger(__name__)

TAG_MATCH_WEIGHT: float = 0.5
WEAK_AREA_RATIO: float = 0.7


@dataclass(frozen=True)
class BookPick:
    """A book title chosen by a quiz rule, with an optional quiz-specific reason."""

    title: str
    reason: Optional[str] = None


def tag_match_fraction(course: Course, tags: Iterable[str]) -> float:
    """Fraction of ``tags`` that appear in the course's searchable text."""
    tags = [t for t in tags if t]
    if not tags:
        return 0.0
    text = course.searchable_text
    matches = sum(1 for t in tags if t.lower() in text)
    return matches / len(tags)


def weak_traits(scores: dict[str, float], ratio: float = WEAK_AREA_RATIO) -> list[str]:
    """Traits scoring below ``ratio`` x the unweighted mean of all traits.

    Order follows the score map's own order.  An empty map has no weak traits.
    """
    if not scores:
        return []
    mean = sum(scores.values()) / len(scores)
    return [trait for trait, score in scores.items() if score < mean * ratio]


def unique_tags(*groups: Iterable[Optional[str]]) -> tuple[str, ...]:
    """Lowercase, strip and de-duplicate tags, keeping first occurrence order."""
    seen: dict[str, None] = {}
    for group in groups:
        for tag in group:
            if tag and tag.strip():
                seen.setdefault(tag.strip().lower(), None)
    return tuple(seen)


class QuizStrategy(ABC):
    """Base class for per-quiz completion, parsing and matching rules.

    Subclasses must:
      1. Set ``record_model`` to the pydantic model of the stored payload.
      2. Implement ``_is_complete(record)`` and ``_parse(record, metadata)``.

    Optional overrides: ``rule_score``, ``match_books``, ``reason``,
    ``label_phrase``, ``profile_phrase`` and ``describe``.
    """

    record_model: ClassVar[type[BaseModel]]

    # ── Completion gate and parsing ──────────────────────────────────────────

    def validate(self, payload: Any) -> Optional[BaseModel]:
        """Return the validated stored record, or ``None`` if the payload is malformed."""
        if payload is None:
            return None
        try:
            return self.record_model.model_validate(payload)
        except ValidationError as exc:
            logger.debug(
                "%s rejected stored payload: %d validation error(s)",
                type(self).__name__, exc.error_count(),
            )
            return None

    def is_complete(self, payload: Any) -> bool:
        record = self.validate(payload)
        return record is not None and self._is_complete(record)

    def parse(self, payload: Any, metadata: QuizMetadata) -> QuizResult:
        """Build the normalised result.  Only call after ``is_complete()`` passed."""
        record = self.record_model.model_validate(payload)
        return self._parse(record, metadata)

    @abstractmethod
    def _is_complete(self, record: BaseModel) -> bool:
        ...

    @abstractmethod
    def _parse(self, record: BaseModel, metadata: QuizMetadata) -> QuizResult:
        ...

    # ── Matching ─────────────────────────────────────────────────────────────

    def rule_score(self, result: QuizResult, course: Course) -> float:
        """Quiz-specific contribution before the generic tag fallback."""
        return 0.0

    def match_course(
        self,
        result: QuizResult,
        course: Course,
        tag_weight: float = TAG_MATCH_WEIGHT,
    ) -> float:
        """Per-quiz course match score, clamped to [0, 1]."""
        score = self.rule_score(result, course)
        score += tag_weight * tag_match_fraction(course, result.tags)
        return max(0.0, min(score, 1.0))

    def match_books(self, result: QuizResult) -> list[BookPick]:
        return []

    def reason(self, result: QuizResult, course: Course) -> Optional[str]:
        return None

    # ── Narration ────────────────────────────────────────────────────────────

    def label_phrase(self, result: QuizResult) -> str:
        """Short noun phrase naming the result, e.g. ``"tamas energy"``."""
        label = result.dominant_label
        return f"{label} result" if label else "quiz result"

    def profile_phrase(self, result: QuizResult) -> str:
        """Phrase used when two results are blended into one profile."""
        return self.label_phrase(result)

    def describe(self, result: QuizResult) -> str:
        label = result.dominant_label
        if label:
            return (
                f"Your {label} result reveals an important part of your spiritual "
                f"makeup. It highlights the learning path most likely to resonate "
                f"with you right now."
            )
        return (
            "Your quiz results reveal important insights about your spiritual "
            "journey and learning preferences."
        )
