"""
Analysis narrator: the human-readable paragraphs of the bundle.

    single_quiz_analysis  always present
        0 results  -> WELCOME_MESSAGE
        1 result   -> that quiz's own description
        2+ results -> the combination of the two highest-priority results

    combined_analysis     only with 2+ results
        fixed opening sentence + a hand-authored paragraph for the three
        known pairings, or GENERIC_COMBINED_TEMPLATE for anything else.

Results arrive in priority order, so "the two highest-priority results"
is simply ``results[:2]``.  Nothing here can fail on an unknown label.
"""

from __future__ import annotations

from typing import Optional, Sequence

from quiz_recommender.models.quiz import QuizResult
from quiz_recommender.quizzes.registry import QuizRegistry
from quiz_recommender.taxonomy.quiz_taxonomy import Guna, ShivaArchetype

WELCOME_MESSAGE = (
    "Welcome to your spiritual journey! Complete the Guna Profiler or Shiva "
    "Consciousness quiz to receive a personalized analysis of your unique "
    "spiritual path and recommendations tailored to your energy patterns and "
    "archetype."
)

PAIR_SUMMARY_TEMPLATE = (
    "Your {first} combined with your {second} creates a unique spiritual "
    "blueprint. This combination suggests a balanced approach to both inner "
    "awareness and transformative action."
)

COMBINED_OPENING_TEMPLATE = (
    "Your spiritual profile reveals a fascinating combination: your {first} "
    "working in harmony with your {second}. "
)

PAIRING_TEMPLATES: dict[tuple[str, str], str] = {
    (Guna.SATTVA.value, ShivaArchetype.SAGE.value): (
        "This rare combination of balanced energy and philosophical wisdom "
        "suggests you have a natural inclination toward deep contemplation and "
        "spiritual understanding. Your path is one of steady growth through "
        "wisdom and insight."
    ),
    (Guna.RAJAS.value, ShivaArchetype.YOGI.value): (
        "Your dynamic energy combined with disciplined practice orientation "
        "creates a powerful force for transformation. You thrive on structured "
        "spiritual practices and systematic approaches to growth."
    ),
    (Guna.TAMAS.value, ShivaArchetype.DESTROYER.value): (
        "Your grounding energy paired with transformative archetype suggests a "
        "journey of profound inner change. You have the potential to turn "
        "challenges into opportunities for deep spiritual awakening."
    ),
}

GENERIC_COMBINED_TEMPLATE = (
    "This unique combination creates a balanced approach to spiritual "
    "development, where your energy patterns support your archetypal "
    "strengths and help you navigate your spiritual journey with authenticity."
)


def single_quiz_analysis(results: Sequence[QuizResult], registry: QuizRegistry) -> str:
    if not results:
        return WELCOME_MESSAGE
    if len(results) == 1:
        result = results[0]
        return registry.strategy_for(result.quiz_id).describe(result)

    first, second = results[0], results[1]
    return PAIR_SUMMARY_TEMPLATE.format(
        first=registry.strategy_for(first.quiz_id).profile_phrase(first),
        second=registry.strategy_for(second.quiz_id).profile_phrase(second),
    )


def combined_analysis(
    results: Sequence[QuizResult],
    registry: QuizRegistry,
) -> Optional[str]:
    """Blended narrative for the top two results; ``None`` with fewer than two."""
    if len(results) < 2:
        return None

    first, second = results[0], results[1]
    opening = COMBINED_OPENING_TEMPLATE.format(
        first=registry.strategy_for(first.quiz_id).label_phrase(first),
        second=registry.strategy_for(second.quiz_id).label_phrase(second),
    )
    key = (first.dominant_label or "", second.dominant_label or "")
    return opening + PAIRING_TEMPLATES.get(key, GENERIC_COMBINED_TEMPLATE)
