from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError

from flashcard.config import MEMORY_URL, AppConfig, load_config
from flashcard.db.base import build_engine
from flashcard.db.migrations_runner import apply_migrations
from flashcard.http.problem import (
    handle_http_exception,
    handle_request_validation_error,
    UnexpectedErrorMiddleware,
)
from flashcard.http.request_id import RequestIdMiddleware
from flashcard.logging_setup import configure_logging
from flashcard.logic.repository_questionnaires import (
    InMemoryQuestionnaireRepository,
    QuestionnaireRepository,
    SqlQuestionnaireRepository,
)
from flashcard.middleware.cors import apply_cors
from flashcard.routes import api_router, pages_router

logger = logging.getLogger(__name__)


def _health_check(app: FastAPI) -> Callable[[], dict]:
    def check() -> dict:
        engine = getattr(app.state, "engine", None)
        if engine is None:
            return {"status": "ok", "db": False}
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "ok", "db": True}
        except SQLAlchemyError as e:
            logger.error("Health DB check failed", exc_info=True)
            return {"status": "degraded", "db": False, "reason": str(e)}

    return check


def create_app(
    config: AppConfig | None = None,
    repository: QuestionnaireRepository | None = None,
) -> FastAPI:
    """Build the application.

    `repository` is owned by the returned app. When omitted, it is built from
    `config.database.url`: `memory://` selects the in-memory store, anything
    else is a SQLAlchemy URL whose migrations run at startup if
    `config.database.auto_migrate` is set. The app builds its own engine for that
    URL and disposes it on shutdown.
    """
    config = config or load_config()
    configure_logging(config.web.log_level)

    engine = None
    if repository is None and config.database.url == MEMORY_URL:
        repository = InMemoryQuestionnaireRepository()
    elif repository is None:
        engine = build_engine(config.database.url)
        repository = SqlQuestionnaireRepository(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None and config.database.auto_migrate:
            try:
                apply_migrations(engine)
            except SQLAlchemyError:
                logger.error("Failed to apply migrations at startup", exc_info=True)
                raise
        elif engine is not None:
            logger.info("auto_migrate disabled; skipping migrations at startup")
        try:
            yield
        finally:
            if engine is not None:
                engine.dispose()

    app = FastAPI(title="Flashcard Questionnaire Service", version="1.0.0", lifespan=lifespan)
    app.state.config = config
    app.state.repository = repository
    app.state.engine = engine

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_middleware(UnexpectedErrorMiddleware)
    apply_cors(app, origins=config.web.cors_origins)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)
    app.include_router(pages_router, prefix=config.web.pages_prefix)

    health_check = _health_check(app)

    @app.get("/health", include_in_schema=False)
    def health():
        return health_check()

    logger.info(
        "app.created repository=%s pages_prefix=%s",
        type(repository).__name__,
        config.web.pages_prefix,
    )
    return app
