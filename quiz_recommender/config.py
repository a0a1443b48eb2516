"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      committed static defaults
  2. ``config/local.toml``        optional local overrides (gitignored)
  3. ``.env``                     local env overrides (gitignored)
  4. Environment variables        ``QUIZ_RECOMMENDER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine itself only needs ``EngineConfig``; hosts that build the engine
by hand can pass ``EngineConfig()`` and skip file loading entirely.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Recommendation size limits and scoring knobs.

    The course category and tier thresholds are fixed in
    ``taxonomy.quiz_taxonomy`` and are deliberately not configurable.
    """

    model_config = ConfigDict(frozen=True)

    max_courses: int = 3
    max_books: int = 2
    min_match_score: float = 0.1
    fallback_course_count: int = 3
    fallback_course_score: float = 0.5
    tag_match_weight: float = 0.5

    @field_validator("max_courses", "max_books", "fallback_course_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Limits must be >= 1, got {v}.")
        return v

    @field_validator("min_match_score", "fallback_course_score", "tag_match_weight")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"Score settings must be in [0.0, 1.0], got {v}.")
        return v


class StoreConfig(BaseModel):
    """Where the exported client-side quiz state lives."""

    model_config = ConfigDict(frozen=True)

    path: str = "data/store/quiz_state.json"
    key_prefix: str = ""


class CatalogConfig(BaseModel):
    """Catalog seed files."""

    model_config = ConfigDict(frozen=True)

    courses_file: str = "config/catalog/courses.json"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    store: StoreConfig = StoreConfig()
    catalog: CatalogConfig = CatalogConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def resolve_path(path: str | Path) -> Path:
    """Resolve a config-relative path against the project root."""
    p = Path(path)
    return p if p.is_absolute() else _find_project_root() / p


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file is
            absent, built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_path = root / "config" / "default.toml"

    if config_path.exists():
        with open(config_path, "rb") as f:
            raw = tomllib.load(f)

        local_config_path = config_path.parent / "local.toml"
        if local_config_path.exists():
            with open(local_config_path, "rb") as f:
                raw = _deep_merge(raw, tomllib.load(f))

    # 3. Apply QUIZ_RECOMMENDER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply QUIZ_RECOMMENDER_* env vars to the raw config dict.

    Supported overrides:
      QUIZ_RECOMMENDER_STORE_PATH    -> raw["store"]["path"]
      QUIZ_RECOMMENDER_CATALOG_PATH  -> raw["catalog"]["courses_file"]
      QUIZ_RECOMMENDER_LOG_LEVEL     -> raw["logging"]["level"]
      QUIZ_RECOMMENDER_DEBUG         -> raw["debug"]
    """
    if store_path := os.environ.get("QUIZ_RECOMMENDER_STORE_PATH"):
        raw.setdefault("store", {})["path"] = store_path

    if catalog_path := os.environ.get("QUIZ_RECOMMENDER_CATALOG_PATH"):
        raw.setdefault("catalog", {})["courses_file"] = catalog_path

    if log_level := os.environ.get("QUIZ_RECOMMENDER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("QUIZ_RECOMMENDER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        store=StoreConfig(**raw.get("store", {})),
        catalog=CatalogConfig(**raw.get("catalog", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
