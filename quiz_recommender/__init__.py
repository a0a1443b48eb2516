"""
Quiz Recommender: course and book recommendations from completed
personality and energy quizzes.

    from quiz_recommender import RecommendationEngine, default_registry

    engine = RecommendationEngine(default_registry(), store, catalog)
    bundle = engine.generate()
"""

from quiz_recommender.catalog.loader import CatalogStore, load_course_catalog
from quiz_recommender.config import AppConfig, EngineConfig, load_config
from quiz_recommender.models.quiz import QuizMetadata
from quiz_recommender.models.recommendation import UnifiedRecommendations
from quiz_recommender.quizzes.registry import QuizRegistry, default_registry
from quiz_recommender.recommendations.aggregator import (
    RecommendationEngine,
    generate_unified_recommendations,
)
from quiz_recommender.store.key_value import InMemoryStore, JsonFileStore

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "CatalogStore",
    "EngineConfig",
    "InMemoryStore",
    "JsonFileStore",
    "QuizMetadata",
    "QuizRegistry",
    "RecommendationEngine",
    "UnifiedRecommendations",
    "default_registry",
    "generate_unified_recommendations",
    "load_config",
    "load_course_catalog",
]
