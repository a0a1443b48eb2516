"""
Guna Profiler strategy: trait-scored quiz over sattva, rajas and tamas.

Completion
----------
Complete when the stored ``scores`` map is non-empty AND ``dominantGuna``
is set.  Anything else (a quiz abandoned mid-way, an empty record) is
ignored.

Guna profile (derived when the client did not store it)
-------------------------------------------------------
    percentages     round(score / total * 100), total of 0 treated as 1
    trait_code      initials ordered by score desc, e.g. tamas > rajas > sattva -> "TRS"
    archetype_code  two-guna code (first two initials) when the lowest score is
                    below 35% of the highest, otherwise the full trait code

Course rules
------------
    dominant tamas   + course mentions meditation | awareness | clarity       -> 0.8
    dominant rajas   + course mentions discipline | practice | action         -> 0.8
    dominant sattva  + course mentions philosophy | wisdom | understanding    -> 0.8
    sattva is a weak area + course mentions meditation | peace               -> +0.6
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from quiz_recommender.catalog import books as bk
from quiz_recommender.models.catalog import Course
from quiz_recommender.models.quiz import QuizMetadata, QuizResult, TraitQuizResult
from quiz_recommender.models.quiz_state import GunaProfilerState
from quiz_recommender.quizzes.base import BookPick, QuizStrategy, unique_tags, weak_traits
from quiz_recommender.taxonomy.quiz_taxonomy import Guna
from quiz_recommender.utils.time_utils import to_utc

GUNA_PROFILER_QUIZ = QuizMetadata(
    quiz_id="guna-profiler",
    name="Guna Profiler",
    description="Discover your dominant energy type",
    tags=("guna", "personality", "energy", "balance"),
    completion_key="gunaProfilerState",
    result_key="gunaProfilerState",
    priority=1,
)

RULE_WEIGHT: float = 0.8
WEAK_SATTVA_WEIGHT: float = 0.6
TWO_GUNA_RATIO: float = 0.35

COURSE_TERMS: dict[str, tuple[str, ...]] = {
    Guna.TAMAS.value:  ("meditation", "awareness", "clarity"),
    Guna.RAJAS.value:  ("discipline", "practice", "action"),
    Guna.SATTVA.value: ("philosophy", "wisdom", "understanding"),
}
WEAK_SATTVA_TERMS: tuple[str, ...] = ("meditation", "peace")

COURSE_REASONS: dict[str, str] = {
    Guna.TAMAS.value:  "Perfect for developing inner awareness and clarity",
    Guna.RAJAS.value:  "Aligns with your action-oriented nature",
    Guna.SATTVA.value: "Supports your balanced and wisdom-seeking approach",
}

BOOK_PICKS: dict[str, tuple[BookPick, ...]] = {
    Guna.TAMAS.value: (
        BookPick(bk.POWER_OF_NOW, "Gentle present-moment practice to lift tamasic inertia"),
        BookPick(bk.MEDITATIONS, "Steady, grounded wisdom for building inner strength"),
    ),
    Guna.RAJAS.value: (
        BookPick(bk.YOGA_SUTRAS, "Channels rajasic drive into disciplined practice"),
        BookPick(bk.HEART_OF_YOGA, "Structured practice suited to an active temperament"),
    ),
    Guna.SATTVA.value: (
        BookPick(bk.UPANISHADS, "Deepens the clarity your sattvic nature already seeks"),
        BookPick(bk.SECRET_OF_THE_VEDA, "Rewards contemplative study of Vedic symbolism"),
    ),
}


@dataclass(frozen=True)
class GunaProfile:
    """Derived guna summary for a score map."""

    percentages: dict[str, int]
    dominant: str
    trait_code: str
    archetype_code: str


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def calculate_guna_profile(scores: dict[str, float]) -> GunaProfile:
    """Compute percentages, dominant guna and trait/archetype codes.

    Ties keep the score map's own order.

    Raises:
        ValueError: If ``scores`` is empty.
    """
    if not scores:
        raise ValueError("Cannot build a guna profile from an empty score map.")

    total = sum(scores.values()) or 1
    percentages = {g: _round_half_up(s / total * 100) for g, s in scores.items()}

    ranked = sorted(scores.items(), key=lambda kv: -kv[1])
    trait_code = "".join(g[0].upper() for g, _ in ranked)

    highest = ranked[0][1]
    lowest = ranked[-1][1]
    if len(ranked) >= 3 and highest > 0 and lowest < highest * TWO_GUNA_RATIO:
        archetype_code = trait_code[:2]
    else:
        archetype_code = trait_code

    return GunaProfile(
        percentages=percentages,
        dominant=ranked[0][0],
        trait_code=trait_code,
        archetype_code=archetype_code,
    )


class GunaProfilerStrategy(QuizStrategy):
    """Completion, parsing and matching rules for the Guna Profiler."""

    record_model = GunaProfilerState
    tag_stem = "guna"

    def _is_complete(self, record: GunaProfilerState) -> bool:
        return bool(record.scores) and bool(record.dominant_guna.strip())

    def _parse(self, record: GunaProfilerState, metadata: QuizMetadata) -> TraitQuizResult:
        dominant = record.dominant_guna.strip().lower()
        profile = calculate_guna_profile(record.scores)

        if record.percentages:
            percentages = {g: _round_half_up(p) for g, p in record.percentages.items()}
        else:
            percentages = profile.percentages

        return TraitQuizResult(
            quiz_id=metadata.quiz_id,
            completed_at=to_utc(record.timestamp),
            dominant_trait=dominant,
            scores=dict(record.scores),
            percentages=percentages,
            trait_code=record.guna_trait_code or profile.trait_code,
            archetype_code=record.personality_archetype_code or profile.archetype_code,
            weak_areas=tuple(weak_traits(record.scores)),
            tags=unique_tags([self.tag_stem, dominant]),
        )

    def rule_score(self, result: QuizResult, course: Course) -> float:
        score = 0.0
        terms = COURSE_TERMS.get(result.dominant_label or "")
        if terms and course.mentions_any(terms):
            score += RULE_WEIGHT
        if Guna.SATTVA.value in result.weak_areas and course.mentions_any(WEAK_SATTVA_TERMS):
            score += WEAK_SATTVA_WEIGHT
        return score

    def match_books(self, result: QuizResult) -> list[BookPick]:
        return list(BOOK_PICKS.get(result.dominant_label or "", ()))

    def reason(self, result: QuizResult, course: Course) -> Optional[str]:
        return COURSE_REASONS.get(result.dominant_label or "")

    def label_phrase(self, result: QuizResult) -> str:
        return f"{result.dominant_label} energy"

    def profile_phrase(self, result: QuizResult) -> str:
        return f"{result.dominant_label} energy pattern"

    def describe(self, result: QuizResult) -> str:
        trait = result.dominant_label
        return (
            f"Your dominant {trait} guna reveals your natural energy pattern. "
            f"This foundation guides your spiritual practices and learning "
            f"preferences. Your {trait} energy influences how you approach "
            f"challenges, relationships, and personal growth."
        )
