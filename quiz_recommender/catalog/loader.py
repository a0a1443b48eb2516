"""
Catalog Store Adapter: course catalog loading and read-only lookups.

The course catalog is data, not logic.  It ships as a JSON seed file
(``config/catalog/courses.json``) in one of two shapes::

    [ {"id": "...", "title": "...", ...}, ... ]
    {"premiumCourses": [ {...}, ... ]}

Validation rules
----------------
- Every entry must validate as a ``Course`` (non-empty id and title).
- Duplicate course ids are rejected.

Catalog declaration order is meaningful: it breaks ties between equally
scored courses and decides which courses fill the fallback slots.

Usage
-----
    from quiz_recommender.catalog.loader import CatalogStore, load_course_catalog

    catalog = CatalogStore(courses=load_course_catalog(Path("config/catalog/courses.json")))
    catalog.courses()
    catalog.book("The Power of Now")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from quiz_recommender.catalog.books import BOOK_CATALOG
from quiz_recommender.models.catalog import Book, Course

logger = logging.getLogger(__name__)


def _extract_records(raw: Any, path: Path) -> list[dict[str, Any]]:
    if isinstance(raw, dict):
        raw = raw.get("premiumCourses", raw.get("courses"))
    if not isinstance(raw, list):
        raise ValueError(
            f"Course catalog {path} must be a JSON list or contain a 'premiumCourses' list."
        )
    return raw


def parse_courses(records: Iterable[dict[str, Any]]) -> list[Course]:
    """Validate raw course dicts, preserving order.

    Raises:
        ValueError: On a duplicate course id.
        pydantic.ValidationError: If an entry fails ``Course`` validation.
    """
    courses: list[Course] = []
    seen: set[str] = set()
    for i, rec in enumerate(records):
        course = Course.model_validate(rec)
        if course.course_id in seen:
            raise ValueError(f"Duplicate course id '{course.course_id}' at index {i}.")
        seen.add(course.course_id)
        courses.append(course)
    return courses


def load_course_catalog(path: Path | str) -> list[Course]:
    """Load and validate the course catalog seed file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On malformed structure or duplicate ids.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Course catalog not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    courses = parse_courses(_extract_records(raw, path))
    logger.info("Loaded %d courses from %s", len(courses), path)
    return courses


class CatalogStore:
    """Read-only view over the course catalog and the curated book list."""

    def __init__(
        self,
        courses: Iterable[Course] = (),
        books: Iterable[Book] = BOOK_CATALOG,
    ) -> None:
        self._courses: tuple[Course, ...] = tuple(courses)
        self._books: tuple[Book, ...] = tuple(books)
        self._books_by_title: dict[str, Book] = {b.title: b for b in self._books}
        self._courses_by_id: dict[str, Course] = {c.course_id: c for c in self._courses}

    def courses(self) -> tuple[Course, ...]:
        return self._courses

    def books(self) -> tuple[Book, ...]:
        return self._books

    def book(self, title: str) -> Optional[Book]:
        return self._books_by_title.get(title)

    def course(self, course_id: str) -> Optional[Course]:
        return self._courses_by_id.get(course_id)
