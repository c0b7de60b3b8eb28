"""Pydantic models for the questionnaire (flashcard set) entity.

`QuestionnaireIn` is the request payload for create and update; `Questionnaire`
is the stored and returned shape. Both serialize to
`{"id": ..., "title": ..., "description": ...}`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class QuestionnaireIn(BaseModel):
    """Request body for POST and PUT. Missing text fields read as empty."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    title: str = Field(default="")
    description: str = Field(default="")

    def to_entity(self, questionnaire_id: str | None = None) -> "Questionnaire":
        return Questionnaire(
            id=questionnaire_id if questionnaire_id is not None else self.id,
            title=self.title,
            description=self.description,
        )


class Questionnaire(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    title: str = ""
    description: str = ""

    def with_id(self, questionnaire_id: str) -> "Questionnaire":
        return self.model_copy(update={"id": questionnaire_id})


__all__ = ["Questionnaire", "QuestionnaireIn"]
