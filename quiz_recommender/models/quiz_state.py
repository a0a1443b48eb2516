"""
Raw quiz state as written to the client-side store.

These models exist only at the Normalizer boundary.  Each quiz strategy
validates the stored payload against its record model; a payload that
fails validation is treated exactly like a quiz that was never taken.

Stored field names are camelCase (they come from a JavaScript client), so
every model accepts both the stored alias and the Python field name.

Example payloads
----------------
Guna Profiler (key ``gunaProfilerState``)::

    {"scores": {"sattva": 4, "rajas": 6, "tamas": 10},
     "dominantGuna": "tamas",
     "timestamp": 1718000000000}

Shiva Consciousness (key ``rishiModeState``)::

    {"rishiProfile": {"archetype": "The Sage", "darshana": "Vedanta",
                      "guna": "sattva"},
     "answers": {"1": "vedanta", "2": "nyaya"},
     "timestamp": "2024-06-10T08:00:00Z"}
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quiz_recommender.utils.time_utils import to_utc

# JSON stores accept NaN and Infinity literals; no record field may hold one.
_RECORD_CONFIG = ConfigDict(
    frozen=True, populate_by_name=True, extra="ignore", allow_inf_nan=False
)


def _coerce_timestamp(v):
    if v is None or v == "":
        return None
    try:
        return to_utc(v)
    except (TypeError, OverflowError) as exc:
        raise ValueError(str(exc)) from exc


def _validate_score_map(v: dict[str, float]) -> dict[str, float]:
    for trait, score in v.items():
        if not math.isfinite(score):
            raise ValueError(f"Score for '{trait}' must be finite, got {score}.")
        if score < 0:
            raise ValueError(f"Score for '{trait}' must be non-negative, got {score}.")
    return v


def _validate_percentages(v: Optional[dict[str, float]]) -> Optional[dict[str, float]]:
    if v is None:
        return v
    for trait, pct in v.items():
        if not math.isfinite(pct):
            raise ValueError(f"Percentage for '{trait}' must be finite, got {pct}.")
    return v


class GunaProfilerState(BaseModel):
    """Stored state of the Guna Profiler quiz."""

    model_config = _RECORD_CONFIG

    scores: dict[str, float] = Field(default_factory=dict)
    dominant_guna: str = Field("", alias="dominantGuna")
    percentages: Optional[dict[str, float]] = None
    personality_archetype_code: Optional[str] = Field(None, alias="personalityArchetypeCode")
    guna_trait_code: Optional[str] = Field(None, alias="gunaTraitCode")
    answers: dict[str, str] = Field(default_factory=dict)
    timestamp: Optional[datetime] = None

    check_timestamp = field_validator("timestamp", mode="before")(_coerce_timestamp)
    check_scores = field_validator("scores")(_validate_score_map)
    check_percentages = field_validator("percentages")(_validate_percentages)


class RishiProfile(BaseModel):
    """Archetype profile resolved by the Shiva Consciousness quiz."""

    model_config = _RECORD_CONFIG

    archetype: str = ""
    darshana: Optional[str] = None
    guna: Optional[str] = None
    chakra: Optional[str] = None


class RishiModeState(BaseModel):
    """Stored state of the Shiva Consciousness quiz."""

    model_config = _RECORD_CONFIG

    rishi_profile: Optional[RishiProfile] = Field(None, alias="rishiProfile")
    answers: dict[str, str] = Field(default_factory=dict)
    timestamp: Optional[datetime] = None

    check_timestamp = field_validator("timestamp", mode="before")(_coerce_timestamp)


class TaggedQuizState(BaseModel):
    """Minimal stored shape accepted for quizzes without a dedicated strategy."""

    model_config = _RECORD_CONFIG

    completed: bool = False
    dominant_trait: Optional[str] = Field(None, alias="dominantTrait")
    archetype: Optional[str] = None
    scores: dict[str, float] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    timestamp: Optional[datetime] = None

    check_timestamp = field_validator("timestamp", mode="before")(_coerce_timestamp)
    check_scores = field_validator("scores")(_validate_score_map)
