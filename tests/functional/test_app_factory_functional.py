"""End-to-end tests for the application factory wiring."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from flashcard.config import MEMORY_URL, AppConfig, DatabaseConfig
from flashcard.db.migrations_runner import apply_migrations
from flashcard.logic.repository_questionnaires import (
    InMemoryQuestionnaireRepository,
    SqlQuestionnaireRepository,
)
from flashcard.main import create_app


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'functional.db'}"


def test_startup_applies_migrations_and_serves_crud(db_url):
    app = create_app(config=AppConfig(database=DatabaseConfig(url=db_url)))
    assert isinstance(app.state.repository, SqlQuestionnaireRepository)

    with TestClient(app) as client:
        created = client.post("/questionnaires", json={"id": "1", "title": "Capitals", "description": "Europe"})
        updated = client.put("/questionnaires/1", json={"title": "Capitals", "description": "World"})
        listed = client.get("/questionnaires")
        deleted = client.delete("/questionnaires/1")
        missing = client.get("/questionnaires/1")

    assert created.status_code == 201
    assert updated.json() == {"id": "1", "title": "Capitals", "description": "World"}
    assert listed.json() == [{"id": "1", "title": "Capitals", "description": "World"}]
    assert deleted.status_code == 204
    assert missing.status_code == 404


def test_health_reports_database(db_url):
    with TestClient(create_app(config=AppConfig(database=DatabaseConfig(url=db_url)))) as client:
        resp = client.get("/health")

    assert resp.json() == {"status": "ok", "db": True}


def test_health_without_database(repository):
    with TestClient(create_app(config=AppConfig(), repository=repository)) as client:
        resp = client.get("/health")

    assert resp.json() == {"status": "ok", "db": False}


def test_auto_migrate_disabled_leaves_schema_absent(db_url):
    config = AppConfig(database=DatabaseConfig(url=db_url, auto_migrate=False))
    with TestClient(create_app(config=config)):
        pass

    engine = create_engine(db_url)
    try:
        with engine.connect() as conn:
            tables = {
                row[0]
                for row in conn.execute(text("SELECT name FROM sqlite_master WHERE type = 'table'"))
            }
    finally:
        engine.dispose()
    assert "questionnaire" not in tables


def test_migrations_apply_once(sqlite_engine):
    # sqlite_engine already ran every migration
    assert apply_migrations(sqlite_engine) == []

    with sqlite_engine.connect() as conn:
        applied = [row[0] for row in conn.execute(text("SELECT filename FROM schema_migrations ORDER BY filename"))]
    assert applied == ["001_create_questionnaire.sql", "002_questionnaire_title_index.sql"]


def test_cors_preflight_allows_rest_methods(client):
    resp = client.options(
        "/questionnaires/1",
        headers={
            "Origin": "https://cards.example",
            "Access-Control-Request-Method": "PUT",
        },
    )

    assert resp.status_code == 200
    assert "PUT" in resp.headers["access-control-allow-methods"]


def test_memory_url_selects_in_memory_repository():
    app = create_app(config=AppConfig(database=DatabaseConfig(url=MEMORY_URL)))
    assert isinstance(app.state.repository, InMemoryQuestionnaireRepository)

    with TestClient(app) as client:
        assert client.post("/questionnaires", json={"id": "m", "title": "Memory"}).status_code == 201
        assert client.get("/questionnaires/m").json()["title"] == "Memory"
        assert client.get("/health").json() == {"status": "ok", "db": False}


def test_default_config_apps_do_not_share_storage():
    first = create_app(config=AppConfig())
    second = create_app(config=AppConfig())
    assert first.state.engine is not second.state.engine

    with TestClient(first) as a, TestClient(second) as b:
        assert a.post("/questionnaires", json={"id": "x", "title": "Only in first"}).status_code == 201
        assert a.get("/questionnaires/x").status_code == 200
        assert b.get("/questionnaires/x").status_code == 404
        assert b.get("/questionnaires").json() == []
