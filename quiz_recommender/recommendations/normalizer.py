"""
Result normalizer: store records -> ``QuizResult`` list.

For each registered quiz, in registry order:

  1. Read the record under ``completion_key``.  Absent -> not completed.
  2. Read the result payload under ``result_key`` (reuses the first read
     when the two keys coincide).
  3. Ask the quiz's strategy whether the payload is a finished quiz.
  4. Parse it into the uniform result shape.

A missing, partial or malformed record simply contributes nothing.  The
output inherits registry order, so callers never need to re-sort.
"""

from __future__ import annotations

import logging

from quiz_recommender.models.quiz import QuizResult
from quiz_recommender.quizzes.registry import QuizRegistry
from quiz_recommender.store.key_value import KeyValueStore

logger = logging.getLogger(__name__)


def normalize_results(registry: QuizRegistry, store: KeyValueStore) -> list[QuizResult]:
    """Return one ``QuizResult`` per completed quiz, in priority order."""
    results: list[QuizResult] = []

    for entry in registry.entries():
        meta = entry.metadata
        marker = store.read(meta.completion_key)
        if marker is None:
            logger.debug(
                "Quiz skipped: nothing stored under '%s'.", meta.completion_key,
                extra={"quiz_id": meta.quiz_id},
            )
            continue

        if meta.result_key == meta.completion_key:
            payload = marker
        else:
            payload = store.read(meta.result_key)

        if not entry.strategy.is_complete(payload):
            logger.debug(
                "Quiz skipped: stored payload is not a completed quiz.",
                extra={"quiz_id": meta.quiz_id},
            )
            continue

        results.append(entry.strategy.parse(payload, meta))

    return results
