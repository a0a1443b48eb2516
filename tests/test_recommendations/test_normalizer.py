"""
Tests for quiz_recommender/recommendations/normalizer.py.

What we test
------------
normalize_results():
  - Empty store yields no results.
  - Completed quizzes come back in registry priority order, whatever the
    order the state was written in, and follow later re-prioritisation.
  - Partial, malformed or wrong-typed records are skipped without raising,
    and never hide the other quizzes.
  - JSON-string records (localStorage serialisation) are decoded.
  - Distinct completion and result keys: both are consulted.
"""

from __future__ import annotations

import json

import pytest

from quiz_recommender.models.quiz import QuizMetadata
from quiz_recommender.recommendations.normalizer import normalize_results
from quiz_recommender.store.key_value import InMemoryStore


class TestNormalizeResults:
    def test_empty_store(self, registry, store):
        assert normalize_results(registry, store) == []

    def test_priority_order(self, registry, store, make_guna_state, make_shiva_state):
        store.set("rishiModeState", make_shiva_state())
        store.set("gunaProfilerState", make_guna_state())
        results = normalize_results(registry, store)
        assert [r.quiz_id for r in results] == ["guna-profiler", "shiva-consciousness"]

    def test_follows_reprioritisation(self, registry, store, make_guna_state, make_shiva_state):
        store.set("gunaProfilerState", make_guna_state())
        store.set("rishiModeState", make_shiva_state())
        registry.register(registry.get("shiva-consciousness").model_copy(update={"priority": 0}))
        results = normalize_results(registry, store)
        assert [r.quiz_id for r in results] == ["shiva-consciousness", "guna-profiler"]

    @pytest.mark.parametrize(
        "guna_payload",
        [
            {"scores": {"tamas": 2}},
            {"scores": {}, "dominantGuna": "tamas"},
            {"scores": {"tamas": "x"}, "dominantGuna": "tamas"},
            "not json at all",
            42,
        ],
    )
    def test_bad_record_skipped(self, registry, store, make_shiva_state, guna_payload):
        store.set("gunaProfilerState", guna_payload)
        store.set("rishiModeState", make_shiva_state())
        results = normalize_results(registry, store)
        assert [r.quiz_id for r in results] == ["shiva-consciousness"]

    def test_json_string_record(self, registry, make_guna_state):
        store = InMemoryStore({"gunaProfilerState": json.dumps(make_guna_state("rajas"))})
        results = normalize_results(registry, store)
        assert results[0].dominant_label == "rajas"

    def test_prefixed_store(self, registry, make_guna_state):
        store = InMemoryStore({"shikshanam_gunaProfilerState": make_guna_state()}, prefix="shikshanam_")
        assert len(normalize_results(registry, store)) == 1


class TestSeparateKeys:
    @pytest.fixture
    def split_quiz(self) -> QuizMetadata:
        return QuizMetadata(
            quiz_id="mimamsa-quest",
            name="Mimamsa Quest",
            completion_key="mimamsaQuestCompleted",
            result_key="mimamsaQuestResult",
            priority=3,
        )

    def test_both_keys_read(self, registry, store, split_quiz):
        registry.register(split_quiz)
        store.set("mimamsaQuestCompleted", True)
        store.set("mimamsaQuestResult", {"dominantTrait": "Dharma"})
        results = normalize_results(registry, store)
        assert [r.quiz_id for r in results] == ["mimamsa-quest"]
        assert results[0].dominant_label == "Dharma"

    def test_result_without_completion_marker(self, registry, store, split_quiz):
        registry.register(split_quiz)
        store.set("mimamsaQuestResult", {"dominantTrait": "Dharma"})
        assert normalize_results(registry, store) == []

    def test_marker_without_result(self, registry, store, split_quiz):
        registry.register(split_quiz)
        store.set("mimamsaQuestCompleted", True)
        assert normalize_results(registry, store) == []
