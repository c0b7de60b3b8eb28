"""Questionnaire REST endpoints (JSON).

Each handler is a straight pass-through to the repository:

- POST   /questionnaires        validate id and title, save, 201
- GET    /questionnaires        list, sorted (ascending by id unless `sort` says otherwise)
- GET    /questionnaires/{id}   200 or 404 with an empty body
- PUT    /questionnaires/{id}   full replacement of an existing questionnaire
- DELETE /questionnaires/{id}   204 or 404

Lookups and writes are separate repository calls; nothing here makes them atomic.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Request, Response, status

from flashcard.config import AppConfig
from flashcard.dependencies import get_config, get_repository
from flashcard.http.problem import problem_response
from flashcard.logic.problem_factory import problem_id_invalid, problem_sort_invalid, problem_title_invalid
from flashcard.logic.repository_questionnaires import QuestionnaireRepository
from flashcard.logic.sorting import InvalidSortError, parse_sort
from flashcard.logic.validation import (
    QuestionnaireValidationError,
    validate_identifier,
    validate_questionnaire,
)
from flashcard.models.questionnaire import Questionnaire, QuestionnaireIn


router = APIRouter()
logger = logging.getLogger(__name__)


def questionnaire_path(request: Request, questionnaire_id: str) -> str:
    """Path of one questionnaire with the id percent-encoded as a single segment."""
    return request.url_for("list_questionnaires").path + "/" + quote(questionnaire_id, safe="")


def _not_found(questionnaire_id: str, operation: str) -> Response:
    logger.info("questionnaire.not_found", extra={"questionnaire_id": questionnaire_id, "operation": operation})
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.post(
    "/questionnaires",
    status_code=status.HTTP_201_CREATED,
    response_model=Questionnaire,
    summary="Create a questionnaire",
    operation_id="createQuestionnaire",
    responses={412: {"description": "Title is empty"}},
)
def create_questionnaire(
    payload: QuestionnaireIn,
    request: Request,
    response: Response,
    repository: QuestionnaireRepository = Depends(get_repository),
    config: AppConfig = Depends(get_config),
):
    questionnaire = payload.to_entity()
    try:
        validate_identifier(questionnaire.id)
    except QuestionnaireValidationError as exc:
        logger.info("questionnaire.create_rejected", extra={"questionnaire_id": questionnaire.id, "code": exc.code})
        return problem_response(problem_id_invalid(str(exc)))
    try:
        validate_questionnaire(questionnaire, reject_blank_titles=config.validation.reject_blank_titles)
    except QuestionnaireValidationError as exc:
        logger.info("questionnaire.create_rejected", extra={"questionnaire_id": questionnaire.id, "code": exc.code})
        return problem_response(problem_title_invalid(str(exc), exc.code))

    saved = repository.save(questionnaire)
    response.headers["Location"] = questionnaire_path(request, saved.id)
    logger.info("questionnaire.created", extra={"questionnaire_id": saved.id})
    return saved


@router.get(
    "/questionnaires",
    response_model=List[Questionnaire],
    summary="List all questionnaires",
    operation_id="listQuestionnaires",
    responses={400: {"description": "Malformed sort value"}},
)
def list_questionnaires(
    sort: Optional[str] = Query(
        default=None,
        description="`field` or `field,direction`; fields: id, title. Defaults to ascending by id.",
    ),
    repository: QuestionnaireRepository = Depends(get_repository),
):
    try:
        sort_spec = parse_sort(sort)
    except InvalidSortError as exc:
        return problem_response(problem_sort_invalid(str(exc)))
    return repository.find_all(sort_spec)


@router.get(
    "/questionnaires/{questionnaire_id}",
    response_model=Questionnaire,
    summary="Get one questionnaire",
    operation_id="getQuestionnaire",
    responses={404: {"description": "Unknown id (empty body)"}},
)
def get_questionnaire(
    questionnaire_id: str,
    repository: QuestionnaireRepository = Depends(get_repository),
):
    found = repository.find_by_id(questionnaire_id)
    if found is None:
        return _not_found(questionnaire_id, "read")
    return found


@router.put(
    "/questionnaires/{questionnaire_id}",
    response_model=Questionnaire,
    summary="Replace an existing questionnaire",
    operation_id="updateQuestionnaire",
    responses={404: {"description": "Unknown id (empty body)"}},
)
def update_questionnaire(
    questionnaire_id: str,
    payload: QuestionnaireIn,
    repository: QuestionnaireRepository = Depends(get_repository),
):
    if repository.find_by_id(questionnaire_id) is None:
        return _not_found(questionnaire_id, "update")
    if payload.id is not None and payload.id != questionnaire_id:
        logger.warning(
            "questionnaire.update_id_mismatch",
            extra={"questionnaire_id": questionnaire_id, "body_id": payload.id},
        )
    # Path id wins over the body id
    saved = repository.save(payload.to_entity(questionnaire_id))
    logger.info("questionnaire.updated", extra={"questionnaire_id": questionnaire_id})
    return saved


@router.delete(
    "/questionnaires/{questionnaire_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a questionnaire",
    operation_id="deleteQuestionnaire",
    responses={404: {"description": "Unknown id (empty body)"}},
)
def delete_questionnaire(
    questionnaire_id: str,
    repository: QuestionnaireRepository = Depends(get_repository),
):
    if repository.find_by_id(questionnaire_id) is None:
        return _not_found(questionnaire_id, "delete")
    repository.delete_by_id(questionnaire_id)
    logger.info("questionnaire.deleted", extra={"questionnaire_id": questionnaire_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
