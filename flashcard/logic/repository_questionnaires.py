"""Questionnaire repository: the storage seam consumed by both front ends.

`QuestionnaireRepository` is the contract. Two implementations are provided:

- `SqlQuestionnaireRepository` runs SQLAlchemy Core statements against the
  `questionnaire` table. Each call is its own transaction.
- `InMemoryQuestionnaireRepository` keeps entities in an insertion-ordered dict
  guarded by a lock. Used for local runs without a database.

Neither implementation makes the controller's find-then-save or
find-then-delete sequence atomic.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Protocol, runtime_checkable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine

from flashcard.logic.sorting import Sort
from flashcard.models.questionnaire import Questionnaire

logger = logging.getLogger(__name__)

# Sort fields mapped onto column names; values never come from user input
_COLUMNS = {"id": "questionnaire_id", "title": "title"}


def new_questionnaire_id() -> str:
    return uuid.uuid4().hex


@runtime_checkable
class QuestionnaireRepository(Protocol):
    def find_by_id(self, questionnaire_id: str) -> Questionnaire | None: ...

    def find_all(self, sort: Sort | None = None) -> list[Questionnaire]: ...

    def save(self, questionnaire: Questionnaire) -> Questionnaire: ...

    def delete_by_id(self, questionnaire_id: str) -> None: ...


class SqlQuestionnaireRepository:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @staticmethod
    def _row_to_entity(row) -> Questionnaire:
        return Questionnaire(id=str(row[0]), title=str(row[1] or ""), description=str(row[2] or ""))

    def find_by_id(self, questionnaire_id: str) -> Questionnaire | None:
        with self.engine.connect() as conn:
            row = conn.execute(
                sql_text(
                    "SELECT questionnaire_id, title, description FROM questionnaire "
                    "WHERE questionnaire_id = :id"
                ),
                {"id": questionnaire_id},
            ).fetchone()
        if not row:
            return None
        return self._row_to_entity(row)

    def find_all(self, sort: Sort | None = None) -> list[Questionnaire]:
        query = "SELECT questionnaire_id, title, description FROM questionnaire"
        if sort is not None:
            column = _COLUMNS[sort.field]
            direction = "DESC" if sort.descending else "ASC"
            # Tie-breaker keeps title ordering deterministic
            query += f" ORDER BY {column} {direction}, questionnaire_id ASC"
        with self.engine.connect() as conn:
            rows = conn.execute(sql_text(query)).fetchall()
        return [self._row_to_entity(r) for r in rows]

    def save(self, questionnaire: Questionnaire) -> Questionnaire:
        if not questionnaire.id:
            questionnaire = questionnaire.with_id(new_questionnaire_id())
        params = {
            "id": questionnaire.id,
            "title": questionnaire.title,
            "description": questionnaire.description,
        }
        with self.engine.begin() as conn:
            updated = conn.execute(
                sql_text(
                    "UPDATE questionnaire SET title = :title, description = :description "
                    "WHERE questionnaire_id = :id"
                ),
                params,
            ).rowcount
            if not updated:
                conn.execute(
                    sql_text(
                        "INSERT INTO questionnaire (questionnaire_id, title, description) "
                        "VALUES (:id, :title, :description)"
                    ),
                    params,
                )
        logger.debug("questionnaire.saved id=%s inserted=%s", questionnaire.id, not updated)
        return questionnaire

    def delete_by_id(self, questionnaire_id: str) -> None:
        with self.engine.begin() as conn:
            deleted = conn.execute(
                sql_text("DELETE FROM questionnaire WHERE questionnaire_id = :id"),
                {"id": questionnaire_id},
            ).rowcount
        if not deleted:
            logger.info("questionnaire.delete_absent id=%s", questionnaire_id)


class InMemoryQuestionnaireRepository:
    def __init__(self, initial: list[Questionnaire] | None = None) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, Questionnaire] = {}
        for q in initial or []:
            self.save(q)

    def find_by_id(self, questionnaire_id: str) -> Questionnaire | None:
        with self._lock:
            return self._items.get(questionnaire_id)

    def find_all(self, sort: Sort | None = None) -> list[Questionnaire]:
        with self._lock:
            items = list(self._items.values())
        return sort.apply(items) if sort is not None else items

    def save(self, questionnaire: Questionnaire) -> Questionnaire:
        if not questionnaire.id:
            questionnaire = questionnaire.with_id(new_questionnaire_id())
        with self._lock:
            self._items[questionnaire.id] = questionnaire
        return questionnaire

    def delete_by_id(self, questionnaire_id: str) -> None:
        with self._lock:
            self._items.pop(questionnaire_id, None)


__all__ = [
    "QuestionnaireRepository",
    "SqlQuestionnaireRepository",
    "InMemoryQuestionnaireRepository",
    "new_questionnaire_id",
]
