"""
Tests for quiz_recommender/quizzes/tagged.py and quizzes/base.py helpers.

What we test
------------
TaggedQuizStrategy:
  - Complete on an explicit flag, a dominant trait or an archetype.
  - Tags merge quiz id, labels, stored tags and metadata tags without duplicates.
  - Matches courses by tag fraction only; no books, no reason.
  - Generic narration.
Helpers:
  - weak_traits(): strictly below 70% of the mean.
  - tag_match_fraction(): empty tag list scores 0.
  - unique_tags(): lowercases, strips and keeps first-seen order.
"""

from __future__ import annotations

import pytest

from quiz_recommender.models.quiz import TaggedQuizResult
from quiz_recommender.quizzes.base import tag_match_fraction, unique_tags, weak_traits
from quiz_recommender.quizzes.tagged import TaggedQuizStrategy


@pytest.fixture
def strategy() -> TaggedQuizStrategy:
    return TaggedQuizStrategy()


class TestCompletion:
    @pytest.mark.parametrize(
        "payload",
        [
            {"completed": True},
            {"dominantTrait": "Heart"},
            {"archetype": "Seeker"},
        ],
    )
    def test_complete(self, strategy, payload):
        assert strategy.is_complete(payload)

    @pytest.mark.parametrize(
        "payload",
        [None, {}, {"completed": False}, {"dominantTrait": "  "}, {"scores": {"a": -1}, "completed": True}],
    )
    def test_incomplete(self, strategy, payload):
        assert strategy.is_complete(payload) is False


class TestParse:
    def test_tags_merged(self, strategy, chakra_quiz):
        result = strategy.parse(
            {"completed": True, "dominantTrait": "Heart", "tags": ["Healing", "chakra"]},
            chakra_quiz,
        )
        assert isinstance(result, TaggedQuizResult)
        assert result.tags == ("chakra-check", "heart", "healing", "chakra")
        assert result.dominant_label == "Heart"

    def test_weak_areas_from_scores(self, strategy, chakra_quiz):
        result = strategy.parse(
            {"completed": True, "scores": {"root": 10, "heart": 10, "crown": 2}},
            chakra_quiz,
        )
        assert result.weak_areas == ("crown",)


class TestMatching:
    def test_tag_fraction_only(self, strategy, chakra_quiz, courses):
        result = strategy.parse({"dominantTrait": "Heart", "tags": ["healing"]}, chakra_quiz)
        tantra = next(c for c in courses if c.course_id == "tantra")
        # 1 of 4 tags ("healing") in the text
        assert strategy.match_course(result, tantra) == pytest.approx(0.125)
        assert strategy.match_books(result) == []
        assert strategy.reason(result, tantra) is None

    def test_generic_narration(self, strategy, chakra_quiz):
        result = strategy.parse({"dominantTrait": "Heart"}, chakra_quiz)
        assert strategy.label_phrase(result) == "Heart result"
        assert "Heart" in strategy.describe(result)

    def test_narration_without_label(self, strategy, chakra_quiz):
        result = strategy.parse({"completed": True}, chakra_quiz)
        assert strategy.label_phrase(result) == "quiz result"
        assert strategy.describe(result).startswith("Your quiz results reveal")


class TestHelpers:
    def test_weak_traits(self):
        # mean 6, threshold 4.2
        assert weak_traits({"a": 4, "b": 4.2, "c": 9.8}) == ["a"]
        assert weak_traits({}) == []

    def test_tag_match_fraction_empty(self, courses):
        assert tag_match_fraction(courses[0], []) == 0.0
        assert tag_match_fraction(courses[0], ["", None]) == 0.0

    def test_unique_tags(self):
        assert unique_tags(["A", " b ", None], ["a", "", "C"]) == ("a", "b", "c")
