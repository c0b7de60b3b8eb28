"""Database bootstrap utilities for the Flashcard Questionnaire Service.

This module exposes convenience imports for engine construction and the
migrations runner that applies SQL files from the packaged migrations/
directory. The DB layer does not leak ORM models into route handlers.
"""

from flashcard.db.base import build_engine
from flashcard.db.migrations_runner import apply_migrations

__all__ = [
    "build_engine",
    "apply_migrations",
]
