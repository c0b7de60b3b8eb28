"""FastAPI dependencies resolving objects owned by the application instance.

`create_app` stores the repository and configuration on `app.state`; handlers
receive them through these callables so tests can swap either per app.
"""

from __future__ import annotations

from fastapi import Request

from flashcard.config import AppConfig
from flashcard.logic.repository_questionnaires import QuestionnaireRepository


def get_repository(request: Request) -> QuestionnaireRepository:
    return request.app.state.repository


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


__all__ = ["get_repository", "get_config"]
