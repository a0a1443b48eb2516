"""
Shiva Consciousness strategy: archetype-resolving quiz.

Completion
----------
Complete when the stored ``rishiProfile`` carries a non-empty archetype.
A record with answers but no resolved profile is an unfinished quiz.

Weak areas
----------
Each answer names a darshana.  Darshanas chosen in fewer than 20% of all
answers are weak areas; darshanas never chosen do not appear at all.

Course rules
------------
    The Destroyer  + course mentions transformation | healing | emotional  -> 0.8
    The Yogi       + course mentions yoga | practice | discipline          -> 0.8
    The Sage       + course mentions philosophy | wisdom | knowledge       -> 0.8
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from quiz_recommender.catalog import books as bk
from quiz_recommender.models.catalog import Course
from quiz_recommender.models.quiz import ArchetypeQuizResult, QuizMetadata, QuizResult
from quiz_recommender.models.quiz_state import RishiModeState
from quiz_recommender.quizzes.base import BookPick, QuizStrategy, unique_tags
from quiz_recommender.taxonomy.quiz_taxonomy import ShivaArchetype
from quiz_recommender.utils.time_utils import to_utc

SHIVA_CONSCIOUSNESS_QUIZ = QuizMetadata(
    quiz_id="shiva-consciousness",
    name="Shiva Consciousness Quiz",
    description="Explore your Shiva archetype",
    tags=("shiva", "archetype", "consciousness", "transformation"),
    completion_key="rishiModeState",
    result_key="rishiModeState",
    priority=2,
)

RULE_WEIGHT: float = 0.8
WEAK_DARSHANA_RATIO: float = 0.2

COURSE_TERMS: dict[str, tuple[str, ...]] = {
    ShivaArchetype.DESTROYER.value: ("transformation", "healing", "emotional"),
    ShivaArchetype.YOGI.value:      ("yoga", "practice", "discipline"),
    ShivaArchetype.SAGE.value:      ("philosophy", "wisdom", "knowledge"),
}

COURSE_REASONS: dict[str, str] = {
    ShivaArchetype.DESTROYER.value: "Helps channel your transformative energy constructively",
    ShivaArchetype.YOGI.value:      "Builds on your disciplined practice orientation",
    ShivaArchetype.SAGE.value:      "Deepens your philosophical understanding",
}

BOOK_PICKS: dict[str, tuple[BookPick, ...]] = {
    ShivaArchetype.DESTROYER.value: (
        BookPick(bk.AUTOBIOGRAPHY_OF_A_YOGI, "A story of inner transformation that mirrors your own"),
        BookPick(bk.POWER_OF_NOW, "Anchors transformative energy in present-moment awareness"),
    ),
    ShivaArchetype.YOGI.value: (
        BookPick(bk.YOGA_SUTRAS, "The foundational manual for your disciplined practice"),
        BookPick(bk.HEART_OF_YOGA, "Extends your practice with a complete yoga methodology"),
    ),
    ShivaArchetype.SAGE.value: (
        BookPick(bk.UPANISHADS, "Primary sources for the philosophical depth you seek"),
        BookPick(bk.BHAGAVAD_GITA, "Timeless dialogue on wisdom and right action"),
    ),
}


def weak_darshanas(answers: dict[str, str], ratio: float = WEAK_DARSHANA_RATIO) -> list[str]:
    """Darshanas chosen in fewer than ``ratio`` of all answers, in first-seen order."""
    counts = Counter(answers.values())
    total = sum(counts.values())
    return [d for d, n in counts.items() if n < total * ratio]


class ShivaConsciousnessStrategy(QuizStrategy):
    """Completion, parsing and matching rules for the Shiva Consciousness quiz."""

    record_model = RishiModeState
    tag_stem = "shiva"

    def _is_complete(self, record: RishiModeState) -> bool:
        profile = record.rishi_profile
        return profile is not None and bool(profile.archetype.strip())

    def _parse(self, record: RishiModeState, metadata: QuizMetadata) -> ArchetypeQuizResult:
        profile = record.rishi_profile
        archetype = profile.archetype.strip()
        return ArchetypeQuizResult(
            quiz_id=metadata.quiz_id,
            completed_at=to_utc(record.timestamp),
            archetype=archetype,
            darshana=profile.darshana,
            guna=profile.guna,
            answers=dict(record.answers),
            weak_areas=tuple(weak_darshanas(record.answers)),
            tags=unique_tags([self.tag_stem, archetype, profile.darshana, profile.guna]),
        )

    def rule_score(self, result: QuizResult, course: Course) -> float:
        terms = COURSE_TERMS.get(result.dominant_label or "")
        if terms and course.mentions_any(terms):
            return RULE_WEIGHT
        return 0.0

    def match_books(self, result: QuizResult) -> list[BookPick]:
        return list(BOOK_PICKS.get(result.dominant_label or "", ()))

    def reason(self, result: QuizResult, course: Course) -> Optional[str]:
        return COURSE_REASONS.get(result.dominant_label or "")

    def label_phrase(self, result: QuizResult) -> str:
        return f"{result.dominant_label} archetype"

    def describe(self, result: QuizResult) -> str:
        return (
            f"Your {result.dominant_label} archetype shows your unique approach to "
            f"transformation and spiritual growth. This archetype reveals how you "
            f"process change, seek wisdom, and connect with your higher self."
        )
