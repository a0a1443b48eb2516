"""
Catalog items the engine scores against.

``Course`` mirrors a premium course entry from the course catalog seed
file.  Only ``title``, ``description`` and ``features`` take part in
matching; they are folded into ``searchable_text`` for case-insensitive
substring checks.

``Book`` is an entry of the fixed curated reading list.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quiz_recommender.taxonomy.quiz_taxonomy import BookCategory, BookDifficulty


class Course(BaseModel):
    """A premium course in the catalog.

    Attributes:
        course_id: Unique catalog identifier.
        title: Display title.
        sanskrit_title: Optional Sanskrit title.
        description: Marketing description; part of the searchable text.
        features: Bullet-point features; part of the searchable text.
        curriculum: Module list (not used for matching).
        level: Free-form level label, e.g. ``"Beginner"``.
        acharya: Teacher name.
        price: Current price.
        duration: Free-form duration, e.g. ``"8 weeks"``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    course_id: str = Field(alias="id")
    title: str
    sanskrit_title: Optional[str] = Field(None, alias="sanskritTitle")
    description: str = ""
    features: tuple[str, ...] = ()
    curriculum: tuple[str, ...] = ()
    level: Optional[str] = None
    acharya: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[str] = None

    @field_validator("course_id", "title")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("course id and title must not be empty.")
        return v.strip()

    @property
    def searchable_text(self) -> str:
        """Lowercased title, description and features joined by spaces."""
        return f"{self.title} {self.description} {' '.join(self.features)}".lower()

    def mentions_any(self, terms: tuple[str, ...] | list[str] | frozenset[str]) -> bool:
        """True if any term appears as a substring of ``searchable_text``."""
        text = self.searchable_text
        return any(term.lower() in text for term in terms)


class Book(BaseModel):
    """A curated book recommendation source."""

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    reason: str
    category: BookCategory
    difficulty: BookDifficulty
