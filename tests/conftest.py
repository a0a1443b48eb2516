"""
Shared pytest fixtures for the Quiz Recommender test suite.

Provides:
  - ``courses``: a five-course catalog whose texts hit exactly one rule
    family each (plus one course that matches nothing).
  - ``catalog``: a ``CatalogStore`` over ``courses`` and the real book list.
  - ``registry``: a fresh ``default_registry()`` per test.
  - Stored-state builders for the Guna Profiler and Shiva Consciousness
    quizzes, in the camelCase shape the web client writes.
"""

from __future__ import annotations

from typing import Any, Optional

import pytest

from quiz_recommender.catalog.loader import CatalogStore
from quiz_recommender.models.catalog import Course
from quiz_recommender.models.quiz import QuizMetadata
from quiz_recommender.quizzes.registry import QuizRegistry, default_registry
from quiz_recommender.store.key_value import InMemoryStore

GUNA_KEY = "gunaProfilerState"
SHIVA_KEY = "rishiModeState"


# ── State builders ────────────────────────────────────────────────────────────

def guna_state(
    dominant: str = "tamas",
    scores: Optional[dict[str, float]] = None,
    **overrides: Any,
) -> dict[str, Any]:
    """A completed Guna Profiler record.  Default scores leave no weak guna."""
    state: dict[str, Any] = {
        "scores": scores if scores is not None else {"sattva": 6, "rajas": 6, "tamas": 8},
        "dominantGuna": dominant,
        "timestamp": 1718000000000,
    }
    state.update(overrides)
    return state


def shiva_state(
    archetype: str = "The Sage",
    darshana: str = "Vedanta",
    guna: str = "sattva",
    answers: Optional[dict[str, str]] = None,
    **overrides: Any,
) -> dict[str, Any]:
    """A completed Shiva Consciousness record."""
    state: dict[str, Any] = {
        "rishiProfile": {"archetype": archetype, "darshana": darshana, "guna": guna},
        "answers": answers if answers is not None else {"1": "vedanta", "2": "vedanta"},
        "timestamp": "2024-06-10T08:00:00Z",
    }
    state.update(overrides)
    return state


def make_course(course_id: str, title: str, description: str = "", features=()) -> Course:
    return Course(id=course_id, title=title, description=description, features=tuple(features))


# ── Catalog fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def courses() -> list[Course]:
    """Catalog in declaration order.

    vedanta  -> sattva / The Sage rules (philosophy, wisdom)
    dhyana   -> tamas rule and weak-sattva bonus (meditation, peace)
    hatha    -> rajas / The Yogi rules (yoga, discipline, practice)
    tantra   -> The Destroyer rule (transformation, healing, emotional)
    sanskrit -> nothing
    """
    return [
        make_course("vedanta", "Vedanta Philosophy", "The wisdom of the Upanishads.",
                    ["Self-knowledge inquiry"]),
        make_course("dhyana", "Dhyana Meditation", "Daily sitting for awareness and peace."),
        make_course("hatha", "Hatha Yoga", "Build discipline through daily practice."),
        make_course("tantra", "Tantra and Transformation",
                    "Emotional healing through Shaiva teachings."),
        make_course("sanskrit", "Sanskrit Grammar", "Read Devanagari script."),
    ]


@pytest.fixture
def catalog(courses: list[Course]) -> CatalogStore:
    return CatalogStore(courses=courses)


# ── Registry and store fixtures ───────────────────────────────────────────────

@pytest.fixture
def registry() -> QuizRegistry:
    return default_registry()


@pytest.fixture
def store() -> InMemoryStore:
    """An empty store; tests ``set()`` whatever state they need."""
    return InMemoryStore()


@pytest.fixture
def chakra_quiz() -> QuizMetadata:
    """A third quiz type with no dedicated strategy."""
    return QuizMetadata(
        quiz_id="chakra-check",
        name="Chakra Check",
        description="Find your most active chakra",
        tags=("chakra",),
        completion_key="chakraCheckState",
        result_key="chakraCheckState",
        priority=3,
    )


@pytest.fixture
def make_guna_state():
    """The ``guna_state`` builder, for tests that need several variants."""
    return guna_state


@pytest.fixture
def make_shiva_state():
    """The ``shiva_state`` builder, for tests that need several variants."""
    return shiva_state


@pytest.fixture
def make_course_fn():
    """The ``make_course`` builder."""
    return make_course
