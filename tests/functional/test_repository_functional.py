"""Contract tests shared by the SQL and in-memory questionnaire repositories."""

from __future__ import annotations

import pytest

from flashcard.logic.repository_questionnaires import (
    InMemoryQuestionnaireRepository,
    QuestionnaireRepository,
)
from flashcard.logic.sorting import Sort
from flashcard.models.questionnaire import Questionnaire


@pytest.fixture(params=["sql", "memory"])
def repo(request, sql_repository) -> QuestionnaireRepository:
    if request.param == "sql":
        return sql_repository
    return InMemoryQuestionnaireRepository()


def test_implementations_satisfy_protocol(repo):
    assert isinstance(repo, QuestionnaireRepository)


def test_find_by_id_absent_returns_none(repo):
    assert repo.find_by_id("missing") is None


def test_save_inserts_then_replaces(repo):
    repo.save(Questionnaire(id="1", title="A", description="first"))
    repo.save(Questionnaire(id="1", title="B", description="second"))

    assert repo.find_by_id("1") == Questionnaire(id="1", title="B", description="second")
    assert len(repo.find_all()) == 1


def test_save_returns_persisted_value(repo):
    q = Questionnaire(id="1", title="A", description="")

    assert repo.save(q) == q


def test_save_assigns_id_when_missing(repo):
    saved = repo.save(Questionnaire(title="No id"))

    assert saved.id
    assert repo.find_by_id(saved.id) == saved


def test_find_all_sorted_by_id_ascending(repo):
    for qid in ("3", "1", "2"):
        repo.save(Questionnaire(id=qid, title=f"T{qid}"))

    assert [q.id for q in repo.find_all(Sort.by_id())] == ["1", "2", "3"]


def test_find_all_sorted_by_title_descending(repo):
    repo.save(Questionnaire(id="1", title="b"))
    repo.save(Questionnaire(id="2", title="a"))
    repo.save(Questionnaire(id="3", title="c"))

    assert [q.title for q in repo.find_all(Sort(field="title", direction="desc"))] == ["c", "b", "a"]


def test_delete_removes_entity(repo):
    repo.save(Questionnaire(id="1", title="A"))

    repo.delete_by_id("1")

    assert repo.find_by_id("1") is None
    assert repo.find_all() == []


def test_delete_absent_is_a_noop(repo):
    repo.save(Questionnaire(id="1", title="A"))

    repo.delete_by_id("missing")
    repo.delete_by_id("missing")

    assert [q.id for q in repo.find_all()] == ["1"]


def test_in_memory_find_all_without_sort_keeps_insertion_order():
    repo = InMemoryQuestionnaireRepository(
        [Questionnaire(id="b", title="x"), Questionnaire(id="a", title="y")]
    )

    assert [q.id for q in repo.find_all()] == ["b", "a"]
