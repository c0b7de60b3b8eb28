"""Business-rule validation for questionnaire writes."""

from __future__ import annotations

from flashcard.models.questionnaire import Questionnaire


class QuestionnaireValidationError(ValueError):
    def __init__(self, message: str, *, code: str = "VALIDATION_TITLE_EMPTY") -> None:
        super().__init__(message)
        self.code = code


def validate_questionnaire(questionnaire: Questionnaire, *, reject_blank_titles: bool = False) -> None:
    """Raise `QuestionnaireValidationError` when the title is unacceptable.

    The empty string is always rejected. A whitespace-only title is rejected
    only when `reject_blank_titles` is set.
    """
    title = questionnaire.title or ""
    if title == "":
        raise QuestionnaireValidationError("title must not be empty")
    if reject_blank_titles and not title.strip():
        raise QuestionnaireValidationError("title must not be blank", code="VALIDATION_TITLE_BLANK")


def validate_identifier(questionnaire_id: str | None) -> None:
    """Raise `QuestionnaireValidationError` for a client id that cannot be a path segment.

    `None` and `""` are accepted; the repository assigns an id on save.
    """
    if questionnaire_id and "/" in questionnaire_id:
        raise QuestionnaireValidationError("id must not contain '/'", code="VALIDATION_ID_INVALID")


__all__ = ["QuestionnaireValidationError", "validate_identifier", "validate_questionnaire"]
