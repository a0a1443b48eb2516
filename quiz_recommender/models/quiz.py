"""
Quiz metadata and normalised quiz results.

``QuizMetadata`` is registry-owned and describes *where* a quiz's state
lives in the client store and how important it is relative to other
quizzes (``priority``, lower = asked first).

``QuizResult`` is a tagged union of the result shapes the Normalizer can
produce.  Every variant shares ``quiz_id``, ``completed_at``,
``weak_areas`` and ``tags``; the ``kind`` discriminator tells downstream
code which extra fields are present:

    kind="trait"      TraitQuizResult      numeric score map + dominant trait
    kind="archetype"  ArchetypeQuizResult  resolved archetype label
    kind="tagged"     TaggedQuizResult     generic quiz with free-form tags

A ``QuizResult`` only ever exists for a quiz whose completion predicate
passed; partial quiz state never reaches these models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quiz_recommender.utils.time_utils import to_utc


class QuizMetadata(BaseModel):
    """Static description of one quiz type.

    Attributes:
        quiz_id: Unique lowercase slug, e.g. ``"guna-profiler"``.
        name: Display name.
        description: One-line description for "take this quiz next" prompts.
        tags: Free-form labels used for generic matching.
        completion_key: Store key whose presence signals completion.
        result_key: Store key holding the result payload.  Often equal to
            ``completion_key``.
        priority: Lower values are asked first and rank first.
    """

    model_config = ConfigDict(frozen=True)

    quiz_id: str
    name: str
    description: str = ""
    tags: tuple[str, ...] = ()
    completion_key: str
    result_key: str
    priority: int

    @field_validator("quiz_id")
    @classmethod
    def validate_quiz_id(cls, v: str) -> str:
        if not v or " " in v or v != v.lower():
            raise ValueError(
                f"quiz_id '{v}' must be a non-empty lowercase slug with no spaces."
            )
        return v

    @field_validator("tags")
    @classmethod
    def normalise_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().lower() for t in v if t and t.strip())

    @field_validator("completion_key", "result_key")
    @classmethod
    def validate_key_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Store keys must not be empty.")
        return v


# ── Result variants ───────────────────────────────────────────────────────────


class _QuizResultBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    quiz_id: str
    completed_at: datetime
    weak_areas: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    @field_validator("completed_at", mode="before")
    @classmethod
    def coerce_completed_at(cls, v):
        return to_utc(v)

    @property
    def dominant_label(self) -> Optional[str]:
        """The single label this quiz assigned as the primary result."""
        return None


class TraitQuizResult(_QuizResultBase):
    """Result of a trait-scored quiz (e.g. the Guna Profiler).

    Attributes:
        dominant_trait: Highest-scoring trait as labelled by the quiz.
        scores: Raw trait -> count map.
        percentages: Trait -> rounded percentage of the total.
        trait_code: Initials of all traits ordered by score, e.g. ``"TRS"``.
        archetype_code: Two- or three-letter personality code.
    """

    kind: Literal["trait"] = "trait"
    dominant_trait: str
    scores: dict[str, float]
    percentages: dict[str, int] = Field(default_factory=dict)
    trait_code: Optional[str] = None
    archetype_code: Optional[str] = None

    @property
    def dominant_label(self) -> Optional[str]:
        return self.dominant_trait


class ArchetypeQuizResult(_QuizResultBase):
    """Result of an archetype-resolving quiz (e.g. Shiva Consciousness).

    Attributes:
        archetype: Resolved archetype label, e.g. ``"The Sage"``.
        darshana: Philosophical school tied to the archetype, if known.
        guna: Guna associated with the archetype, if known.
        answers: Question id -> chosen darshana.
    """

    kind: Literal["archetype"] = "archetype"
    archetype: str
    darshana: Optional[str] = None
    guna: Optional[str] = None
    answers: dict[str, str] = Field(default_factory=dict)

    @property
    def dominant_label(self) -> Optional[str]:
        return self.archetype


class TaggedQuizResult(_QuizResultBase):
    """Result of a quiz registered without a dedicated strategy."""

    kind: Literal["tagged"] = "tagged"
    dominant_trait: Optional[str] = None
    archetype: Optional[str] = None
    scores: dict[str, float] = Field(default_factory=dict)

    @property
    def dominant_label(self) -> Optional[str]:
        return self.dominant_trait or self.archetype


QuizResult = Annotated[
    Union[TraitQuizResult, ArchetypeQuizResult, TaggedQuizResult],
    Field(discriminator="kind"),
]
