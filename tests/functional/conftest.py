from __future__ import annotations

"""Functional test bootstrap.

Builds the FastAPI app around a call-recording repository so tests can assert
both the HTTP contract and exactly which repository operations ran. SQL-backed
tests get a private in-memory SQLite engine with migrations applied.
"""

from typing import Any, List, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from flashcard.config import AppConfig
from flashcard.db.migrations_runner import apply_migrations
from flashcard.logic.repository_questionnaires import (
    InMemoryQuestionnaireRepository,
    SqlQuestionnaireRepository,
)
from flashcard.main import create_app
from flashcard.models.questionnaire import Questionnaire


class RecordingRepository(InMemoryQuestionnaireRepository):
    """In-memory repository that records every call as (name, argument)."""

    def __init__(self, initial: List[Questionnaire] | None = None) -> None:
        self.calls: List[Tuple[str, Any]] = []
        super().__init__(initial)
        self.calls.clear()

    def reset_calls(self) -> None:
        self.calls.clear()

    def calls_to(self, name: str) -> List[Any]:
        return [arg for call, arg in self.calls if call == name]

    def find_by_id(self, questionnaire_id):
        self.calls.append(("find_by_id", questionnaire_id))
        return super().find_by_id(questionnaire_id)

    def find_all(self, sort=None):
        self.calls.append(("find_all", sort))
        return super().find_all(sort)

    def save(self, questionnaire):
        self.calls.append(("save", questionnaire))
        return super().save(questionnaire)

    def delete_by_id(self, questionnaire_id):
        self.calls.append(("delete_by_id", questionnaire_id))
        super().delete_by_id(questionnaire_id)


@pytest.fixture
def repository() -> RecordingRepository:
    return RecordingRepository()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def client(repository: RecordingRepository, app_config: AppConfig) -> TestClient:
    app = create_app(config=app_config, repository=repository)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seed(repository: RecordingRepository):
    """Store questionnaires without recording the calls."""

    def _seed(*items: Questionnaire) -> None:
        for q in items:
            InMemoryQuestionnaireRepository.save(repository, q)

    return _seed


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    apply_migrations(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(sqlite_engine) -> SqlQuestionnaireRepository:
    return SqlQuestionnaireRepository(sqlite_engine)
