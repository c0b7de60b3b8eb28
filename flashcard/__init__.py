"""FastAPI application package for the Flashcard Questionnaire Service.

This package exposes a small FastAPI application factory. It wires only
cross-cutting middleware (request-id and CORS) and mounts the REST and HTML
routers. Business logic lives in `flashcard/logic/` and route handlers in
`flashcard/routes/`.
"""

from __future__ import annotations

from flashcard.main import create_app

__all__ = ["create_app"]
