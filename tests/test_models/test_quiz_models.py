"""
Tests for quiz_recommender/models/.

What we test
------------
QuizMetadata:
  - quiz_id must be a lowercase slug; tags are normalised; keys non-empty.
  - Frozen.
QuizResult union:
  - The ``kind`` discriminator selects the right variant.
  - dominant_label per variant.
Stored state records (quiz_state.py):
  - camelCase aliases and snake_case names both populate.
  - Timestamps in millis / ISO form become aware UTC datetimes.
  - Negative scores and non-numeric scores fail validation.
CourseRecommendation:
  - from_score clamps and classifies.
  - Hand-built category/tier inconsistent with the score is rejected.
BookRecommendation:
  - from_book keeps the catalog reason unless one is supplied.
"""

from __future__ import annotations

from datetime import timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from quiz_recommender.catalog.books import BOOK_CATALOG, POWER_OF_NOW
from quiz_recommender.models.catalog import Course
from quiz_recommender.models.quiz import (
    ArchetypeQuizResult,
    QuizMetadata,
    QuizResult,
    TaggedQuizResult,
    TraitQuizResult,
)
from quiz_recommender.models.quiz_state import GunaProfilerState, RishiModeState
from quiz_recommender.models.recommendation import BookRecommendation, CourseRecommendation
from quiz_recommender.taxonomy.quiz_taxonomy import CourseCategory, MatchTier


def _meta(**overrides) -> QuizMetadata:
    base = dict(
        quiz_id="test-quiz",
        name="Test",
        completion_key="k",
        result_key="k",
        priority=1,
    )
    base.update(overrides)
    return QuizMetadata(**base)


class TestQuizMetadata:
    @pytest.mark.parametrize("quiz_id", ["", "Has Caps", "has space", "UPPER"])
    def test_bad_ids(self, quiz_id):
        with pytest.raises(ValidationError):
            _meta(quiz_id=quiz_id)

    def test_tags_normalised(self):
        assert _meta(tags=(" Chakra ", "", "ENERGY")).tags == ("chakra", "energy")

    def test_empty_key_rejected(self):
        with pytest.raises(ValidationError):
            _meta(completion_key="  ")

    def test_frozen(self):
        meta = _meta()
        with pytest.raises(ValidationError):
            meta.priority = 5


class TestQuizResultUnion:
    adapter = TypeAdapter(QuizResult)

    def test_trait_variant(self):
        result = self.adapter.validate_python(
            {"kind": "trait", "quiz_id": "q", "completed_at": 1718000000,
             "dominant_trait": "rajas", "scores": {"rajas": 3}}
        )
        assert isinstance(result, TraitQuizResult)
        assert result.dominant_label == "rajas"
        assert result.completed_at.tzinfo == timezone.utc

    def test_archetype_variant(self):
        result = self.adapter.validate_python(
            {"kind": "archetype", "quiz_id": "q", "completed_at": "2024-01-01T00:00:00Z",
             "archetype": "The Yogi"}
        )
        assert isinstance(result, ArchetypeQuizResult)
        assert result.dominant_label == "The Yogi"

    def test_tagged_variant_label_falls_back_to_archetype(self):
        result = self.adapter.validate_python(
            {"kind": "tagged", "quiz_id": "q", "completed_at": None, "archetype": "Heart"}
        )
        assert isinstance(result, TaggedQuizResult)
        assert result.dominant_label == "Heart"

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "other", "quiz_id": "q", "completed_at": None})


class TestStoredState:
    def test_guna_aliases(self):
        state = GunaProfilerState.model_validate(
            {"scores": {"tamas": 3}, "dominantGuna": "tamas",
             "personalityArchetypeCode": "TR", "timestamp": 1718000000000}
        )
        assert state.dominant_guna == "tamas"
        assert state.personality_archetype_code == "TR"
        assert state.timestamp.year == 2024

    def test_guna_field_names(self):
        state = GunaProfilerState(scores={"rajas": 1}, dominant_guna="rajas")
        assert state.dominant_guna == "rajas"
        assert state.timestamp is None

    def test_unknown_fields_ignored(self):
        state = GunaProfilerState.model_validate({"scores": {}, "currentQuestion": 4})
        assert state.scores == {}

    def test_negative_score_rejected(self):
        with pytest.raises(ValidationError):
            GunaProfilerState.model_validate({"scores": {"tamas": -1}, "dominantGuna": "tamas"})

    def test_non_numeric_score_rejected(self):
        with pytest.raises(ValidationError):
            GunaProfilerState.model_validate({"scores": {"tamas": "lots"}, "dominantGuna": "tamas"})

    def test_bad_timestamp_type_rejected(self):
        with pytest.raises(ValidationError):
            GunaProfilerState.model_validate({"scores": {}, "timestamp": True})

    def test_rishi_profile_alias(self):
        state = RishiModeState.model_validate(
            {"rishiProfile": {"archetype": "The Sage", "darshana": "Vedanta"},
             "answers": {"1": "vedanta"}}
        )
        assert state.rishi_profile.archetype == "The Sage"
        assert state.rishi_profile.guna is None


class TestCourseRecommendation:
    course = Course(id="c", title="C")

    @pytest.mark.parametrize(
        "score, category, tier",
        [
            (0.9, CourseCategory.PRIMARY, MatchTier.PERFECT),
            (0.75, CourseCategory.PRIMARY, MatchTier.HIGH),
            (0.65, CourseCategory.SECONDARY, MatchTier.HIGH),
            (0.5, CourseCategory.EXPLORE, MatchTier.GOOD),
        ],
    )
    def test_from_score_classifies(self, score, category, tier):
        rec = CourseRecommendation.from_score(self.course, score, "r")
        assert (rec.category, rec.tier) == (category, tier)

    def test_from_score_clamps(self):
        assert CourseRecommendation.from_score(self.course, 1.4, "r").match_score == 1.0
        assert CourseRecommendation.from_score(self.course, -0.2, "r").match_score == 0.0

    def test_inconsistent_category_rejected(self):
        with pytest.raises(ValidationError):
            CourseRecommendation(
                course=self.course, match_score=0.3,
                category=CourseCategory.PRIMARY, tier=MatchTier.GOOD, reason="r",
            )

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            CourseRecommendation(
                course=self.course, match_score=1.2,
                category=CourseCategory.PRIMARY, tier=MatchTier.PERFECT, reason="r",
            )


class TestBookRecommendation:
    book = next(b for b in BOOK_CATALOG if b.title == POWER_OF_NOW)

    def test_catalog_reason_default(self):
        assert BookRecommendation.from_book(self.book).reason == self.book.reason

    def test_reason_override(self):
        rec = BookRecommendation.from_book(self.book, "Because.")
        assert rec.reason == "Because."
        assert rec.difficulty == self.book.difficulty
