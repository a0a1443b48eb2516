"""
Recommendation report output: plain dict, text and JSON file renderings of
a ``UnifiedRecommendations`` bundle.

All functions are pure apart from ``write_recommendations_json``, which
creates its output directory when missing.

Output file
-----------
  data/outputs/recommendations/
    recommendations_{date}.json
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from quiz_recommender.models.recommendation import UnifiedRecommendations

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1"


def bundle_to_dict(bundle: UnifiedRecommendations) -> dict[str, Any]:
    """JSON-safe dict of the bundle (enums as values, nested models flattened)."""
    nq = bundle.next_quiz
    return {
        "has_history": bundle.has_history,
        "next_quiz": (
            {"quiz_id": nq.quiz_id, "name": nq.name, "description": nq.description}
            if nq else None
        ),
        "courses": [
            {
                "rank":        rank,
                "course_id":   rec.course.course_id,
                "title":       rec.course.title,
                "match_score": round(rec.match_score, 4),
                "category":    rec.category.value,
                "tier":        rec.tier.value,
                "reason":      rec.reason,
            }
            for rank, rec in enumerate(bundle.courses, start=1)
        ],
        "books": [
            {
                "title":      book.title,
                "author":     book.author,
                "category":   book.category.value,
                "difficulty": book.difficulty.value,
                "reason":     book.reason,
            }
            for book in bundle.books
        ],
        "analysis": bundle.analysis,
        "combined_analysis": bundle.combined_analysis,
    }


def format_recommendations_text(bundle: UnifiedRecommendations) -> str:
    """Multi-line, human-readable rendering for terminals."""
    lines: list[str] = []

    if bundle.next_quiz is not None:
        lines.append(f"Next quiz: {bundle.next_quiz.name} ({bundle.next_quiz.quiz_id})")
    else:
        lines.append("Next quiz: all quizzes completed")
    lines.append("")

    lines.append("Courses")
    lines.append("-------")
    if not bundle.courses:
        lines.append("  (none)")
    for rank, rec in enumerate(bundle.courses, start=1):
        lines.append(
            f"  {rank}. {rec.course.title}  [{rec.category.value}/{rec.tier.value} "
            f"{rec.match_score:.0%}]"
        )
        lines.append(f"     {rec.reason}")
    lines.append("")

    lines.append("Books")
    lines.append("-----")
    if not bundle.books:
        lines.append("  (none)")
    for book in bundle.books:
        lines.append(f"  - {book.title} by {book.author} ({book.difficulty.value})")
        lines.append(f"     {book.reason}")
    lines.append("")

    lines.append("Analysis")
    lines.append("--------")
    lines.append(bundle.analysis)
    if bundle.combined_analysis:
        lines.append("")
        lines.append(bundle.combined_analysis)

    return "\n".join(lines)


def write_recommendations_json(
    bundle: UnifiedRecommendations,
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write the bundle to ``recommendations_{run_date}.json``.

    Args:
        bundle:     Output of ``RecommendationEngine.generate()``.
        output_dir: Target directory (created if missing).
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{run_date}.json"

    payload: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "generated_at":   run_date.isoformat(),
        **bundle_to_dict(bundle),
    }

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info(
        "Recommendation JSON written: %s (%d courses, %d books)",
        json_path, len(bundle.courses), len(bundle.books),
    )
    return json_path
