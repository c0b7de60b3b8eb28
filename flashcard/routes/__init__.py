"""APIRouter registration for the Flashcard Questionnaire Service."""

from __future__ import annotations

from fastapi import APIRouter

from flashcard.routes.pages import router as pages_router
from flashcard.routes.questionnaires import router as questionnaires_router

api_router = APIRouter()
api_router.include_router(questionnaires_router, tags=["Questionnaires"])

__all__ = ["api_router", "pages_router"]
