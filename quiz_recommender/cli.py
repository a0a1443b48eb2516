"""
Quiz Recommender CLI entry point.

Developer tooling over the library: inspect the registry, check which
quizzes a stored state has completed, and render a recommendation bundle.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build the store / catalog / registry the command needs.
  4. Report the result to stdout.

Install and run::

    pip install -e .
    quiz-recommender --help
    quiz-recommender validate-config
    quiz-recommender list-quizzes
    quiz-recommender quiz-status --store data/store/quiz_state.json
    quiz-recommender recommend --json --output-dir data/outputs/recommendations
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="quiz-recommender",
    help="Quiz-driven course and book recommendations.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from quiz_recommender.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from quiz_recommender.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_engine(config, store_path: Optional[str], catalog_path: Optional[str]):
    """Wire registry, JSON file store and catalog into an engine, exiting on bad seed data."""
    from quiz_recommender.catalog.loader import CatalogStore, load_course_catalog
    from quiz_recommender.config import resolve_path
    from quiz_recommender.quizzes.registry import default_registry
    from quiz_recommender.recommendations.aggregator import RecommendationEngine
    from quiz_recommender.store.key_value import JsonFileStore

    store = JsonFileStore(
        Path(store_path) if store_path else resolve_path(config.store.path),
        prefix=config.store.key_prefix,
    )

    try:
        courses = load_course_catalog(
            Path(catalog_path) if catalog_path else resolve_path(config.catalog.courses_file)
        )
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] Course catalog could not be loaded: {exc}", err=True)
        raise typer.Exit(code=1)

    return RecommendationEngine(
        default_registry(), store, CatalogStore(courses=courses), config=config.engine
    )


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Store path:       {config.store.path}")
    typer.echo(f"  Course catalog:   {config.catalog.courses_file}")
    typer.echo(f"  Max courses:      {config.engine.max_courses}")
    typer.echo(f"  Max books:        {config.engine.max_books}")
    typer.echo(f"  Min match score:  {config.engine.min_match_score}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))


@app.command("list-quizzes")
def list_quizzes() -> None:
    """List the registered quiz types in priority order."""
    from quiz_recommender.quizzes.registry import default_registry

    registry = default_registry()
    for quiz in registry.list_quizzes():
        tags = ", ".join(quiz.tags)
        typer.echo(f"  {quiz.priority:>3}  {quiz.quiz_id:<22} {quiz.name}  [{tags}]")


@app.command("quiz-status")
def quiz_status(
    store_path: Optional[str] = typer.Option(
        None,
        "--store",
        help="Override quiz state JSON path from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show which registered quizzes the stored state has completed."""
    from quiz_recommender.quizzes.registry import default_registry
    from quiz_recommender.recommendations.aggregator import RecommendationEngine
    from quiz_recommender.catalog.loader import CatalogStore
    from quiz_recommender.config import resolve_path
    from quiz_recommender.store.key_value import JsonFileStore

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    store = JsonFileStore(
        Path(store_path) if store_path else resolve_path(config.store.path),
        prefix=config.store.key_prefix,
    )
    engine = RecommendationEngine(default_registry(), store, CatalogStore(), config=config.engine)

    for quiz_id, done in engine.completion_status().items():
        mark = "x" if done else " "
        typer.echo(f"  [{mark}] {quiz_id}")
    typer.echo("")
    typer.echo(f"Next step: {engine.next_step()}")


@app.command("recommend")
def recommend(
    store_path: Optional[str] = typer.Option(
        None,
        "--store",
        help="Override quiz state JSON path from config.",
    ),
    catalog_path: Optional[str] = typer.Option(
        None,
        "--catalog",
        help="Override course catalog JSON path from config.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the bundle as JSON instead of text.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Also write recommendations_{date}.json into this directory.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Generate recommendations from the stored quiz state."""
    from quiz_recommender.recommendations.reporter import (
        bundle_to_dict,
        format_recommendations_text,
        write_recommendations_json,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    engine = _build_engine(config, store_path, catalog_path)
    bundle = engine.generate()

    if as_json:
        typer.echo(json.dumps(bundle_to_dict(bundle), indent=2, ensure_ascii=False))
    else:
        typer.echo(format_recommendations_text(bundle))

    if output_dir:
        path = write_recommendations_json(bundle, Path(output_dir))
        typer.echo("")
        typer.echo(f"[OK] Report written: {path}")


if __name__ == "__main__":
    app()
