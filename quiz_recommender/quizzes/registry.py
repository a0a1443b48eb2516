"""
Quiz registry: the ordered catalog of known quiz types.

The registry is an explicit object constructed by the host and passed to
the engine; there is no module-level registry.  ``default_registry()``
returns a fresh instance holding the two shipped quizzes.

Ordering
--------
``list_quizzes()`` is sorted by ``priority`` ascending.  Ties keep
registration order (stable sort).  Every downstream consumer (normalised
results, next-quiz selection, narration) inherits this order.

Registration
------------
``register(metadata, strategy=None)`` inserts or replaces by ``quiz_id``
and re-sorts.  Replacing a quiz without passing a strategy keeps the one
already registered; a brand-new quiz without a strategy gets the generic
``TaggedQuizStrategy``.

Writers take a lock and swap in a new list; readers always see a complete
snapshot, so ``generate()`` may run concurrently with a rare registration.

Usage
-----
    from quiz_recommender.quizzes.registry import default_registry

    registry = default_registry()
    registry.register(QuizMetadata(quiz_id="chakra-check", ...))
    [q.quiz_id for q in registry.list_quizzes()]
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from quiz_recommender.models.quiz import QuizMetadata
from quiz_recommender.quizzes.base import QuizStrategy
from quiz_recommender.quizzes.guna import GUNA_PROFILER_QUIZ, GunaProfilerStrategy
from quiz_recommender.quizzes.shiva import SHIVA_CONSCIOUSNESS_QUIZ, ShivaConsciousnessStrategy
from quiz_recommender.quizzes.tagged import TaggedQuizStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredQuiz:
    """A quiz's metadata paired with the strategy that interprets its results."""

    metadata: QuizMetadata
    strategy: QuizStrategy


class QuizRegistry:
    """Priority-ordered set of quiz types, keyed by ``quiz_id``."""

    def __init__(
        self,
        entries: Iterable[tuple[QuizMetadata, Optional[QuizStrategy]]] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._entries: tuple[RegisteredQuiz, ...] = ()
        for metadata, strategy in entries:
            self.register(metadata, strategy)

    def register(
        self,
        metadata: QuizMetadata,
        strategy: Optional[QuizStrategy] = None,
    ) -> None:
        """Insert or replace a quiz type by id, then re-sort by priority."""
        with self._lock:
            entries = list(self._entries)
            for i, existing in enumerate(entries):
                if existing.metadata.quiz_id == metadata.quiz_id:
                    entries[i] = RegisteredQuiz(metadata, strategy or existing.strategy)
                    logger.info("Replaced quiz '%s' (priority %d)", metadata.quiz_id, metadata.priority)
                    break
            else:
                entries.append(RegisteredQuiz(metadata, strategy or TaggedQuizStrategy()))
                logger.info("Registered quiz '%s' (priority %d)", metadata.quiz_id, metadata.priority)

            entries.sort(key=lambda e: e.metadata.priority)
            self._entries = tuple(entries)

    def entries(self) -> tuple[RegisteredQuiz, ...]:
        """Snapshot of all registered quizzes in priority order."""
        return self._entries

    def list_quizzes(self) -> list[QuizMetadata]:
        return [e.metadata for e in self._entries]

    def get(self, quiz_id: str) -> Optional[QuizMetadata]:
        for e in self._entries:
            if e.metadata.quiz_id == quiz_id:
                return e.metadata
        return None

    def strategy_for(self, quiz_id: str) -> QuizStrategy:
        """Return the strategy for a registered quiz.

        Raises:
            KeyError: If ``quiz_id`` is not registered.
        """
        for e in self._entries:
            if e.metadata.quiz_id == quiz_id:
                return e.strategy
        raise KeyError(f"No quiz registered with id '{quiz_id}'.")

    def __contains__(self, quiz_id: object) -> bool:
        return any(e.metadata.quiz_id == quiz_id for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def default_registry() -> QuizRegistry:
    """A new registry holding the Guna Profiler and Shiva Consciousness quizzes."""
    return QuizRegistry(
        [
            (GUNA_PROFILER_QUIZ, GunaProfilerStrategy()),
            (SHIVA_CONSCIOUSNESS_QUIZ, ShivaConsciousnessStrategy()),
        ]
    )
