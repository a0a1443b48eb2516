"""
Generic strategy for quizzes registered without dedicated rules.

A newly registered quiz type works end to end with no code changes: its
results are matched purely through the tag fallback, contribute no book
picks and are narrated with the generic templates.

Stored shape accepted (see ``TaggedQuizState``)::

    {"dominantTrait": "...", "archetype": "...", "completed": true,
     "scores": {...}, "tags": [...], "timestamp": ...}

Complete when ``dominantTrait`` or ``archetype`` is non-empty, or
``completed`` is true.
"""

from __future__ import annotations

from quiz_recommender.models.quiz import QuizMetadata, TaggedQuizResult
from quiz_recommender.models.quiz_state import TaggedQuizState
from quiz_recommender.quizzes.base import QuizStrategy, unique_tags, weak_traits
from quiz_recommender.utils.time_utils import to_utc


class TaggedQuizStrategy(QuizStrategy):
    """Tag-only matching for any quiz."""

    record_model = TaggedQuizState

    def _is_complete(self, record: TaggedQuizState) -> bool:
        return (
            record.completed
            or bool((record.dominant_trait or "").strip())
            or bool((record.archetype or "").strip())
        )

    def _parse(self, record: TaggedQuizState, metadata: QuizMetadata) -> TaggedQuizResult:
        dominant = (record.dominant_trait or "").strip() or None
        archetype = (record.archetype or "").strip() or None
        return TaggedQuizResult(
            quiz_id=metadata.quiz_id,
            completed_at=to_utc(record.timestamp),
            dominant_trait=dominant,
            archetype=archetype,
            scores=dict(record.scores),
            weak_areas=tuple(weak_traits(record.scores)),
            tags=unique_tags(
                [metadata.quiz_id, dominant, archetype], record.tags, metadata.tags
            ),
        )
