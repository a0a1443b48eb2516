"""
Curated reading list.

Books are never invented: every title any quiz strategy can recommend
must appear in ``BOOK_CATALOG``.  ``FOUNDATIONAL_TITLES`` is the fallback
set shown when no quiz produced a book pick.
"""

from __future__ import annotations

from quiz_recommender.models.catalog import Book
from quiz_recommender.taxonomy.quiz_taxonomy import BookCategory, BookDifficulty

BHAGAVAD_GITA = "The Bhagavad Gita"
UPANISHADS = "The Upanishads"
YOGA_SUTRAS = "Yoga Sutras of Patanjali"
AUTOBIOGRAPHY_OF_A_YOGI = "Autobiography of a Yogi"
POWER_OF_NOW = "The Power of Now"
MEDITATIONS = "Meditations"
HEART_OF_YOGA = "The Heart of Yoga"
SECRET_OF_THE_VEDA = "The Secret of the Veda"

BOOK_CATALOG: tuple[Book, ...] = (
    Book(
        title=BHAGAVAD_GITA,
        author="Translated by Stephen Mitchell",
        reason="Essential scripture for understanding dharma and spiritual practice",
        category=BookCategory.SCRIPTURE,
        difficulty=BookDifficulty.INTERMEDIATE,
    ),
    Book(
        title=UPANISHADS,
        author="Eknath Easwaran",
        reason="Core texts for understanding Vedantic philosophy",
        category=BookCategory.PHILOSOPHY,
        difficulty=BookDifficulty.ADVANCED,
    ),
    Book(
        title=YOGA_SUTRAS,
        author="Sri Swami Satchidananda",
        reason="Practical guide for disciplined spiritual practice",
        category=BookCategory.PRACTICE,
        difficulty=BookDifficulty.INTERMEDIATE,
    ),
    Book(
        title=AUTOBIOGRAPHY_OF_A_YOGI,
        author="Paramahansa Yogananda",
        reason="Inspirational journey of spiritual awakening",
        category=BookCategory.PRACTICE,
        difficulty=BookDifficulty.BEGINNER,
    ),
    Book(
        title=POWER_OF_NOW,
        author="Eckhart Tolle",
        reason="Modern guide to present-moment awareness",
        category=BookCategory.MEDITATION,
        difficulty=BookDifficulty.BEGINNER,
    ),
    Book(
        title=MEDITATIONS,
        author="Marcus Aurelius",
        reason="Stoic wisdom for inner strength and clarity",
        category=BookCategory.PHILOSOPHY,
        difficulty=BookDifficulty.INTERMEDIATE,
    ),
    Book(
        title=HEART_OF_YOGA,
        author="T.K.V. Desikachar",
        reason="Comprehensive guide to yoga philosophy and practice",
        category=BookCategory.PRACTICE,
        difficulty=BookDifficulty.INTERMEDIATE,
    ),
    Book(
        title=SECRET_OF_THE_VEDA,
        author="Sri Aurobindo",
        reason="Deep insights into Vedic wisdom and symbolism",
        category=BookCategory.PHILOSOPHY,
        difficulty=BookDifficulty.ADVANCED,
    ),
)

FOUNDATIONAL_TITLES: tuple[str, ...] = (BHAGAVAD_GITA, POWER_OF_NOW, YOGA_SUTRAS)
