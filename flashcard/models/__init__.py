"""Domain models."""

from flashcard.models.questionnaire import Questionnaire, QuestionnaireIn

__all__ = ["Questionnaire", "QuestionnaireIn"]
