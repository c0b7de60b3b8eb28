"""Server-rendered HTML pages over the questionnaire repository.

Mounted under the configured pages prefix (default `/pages`):

- `{prefix}/`                      welcome page
- `{prefix}/questionnaires`        listing, ascending by id
- `{prefix}/questionnaires/{id}`   detail page, or a "no questionnaire found" message
- anything else under the prefix   welcome page

Templates autoescape, so titles and descriptions are rendered as text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from flashcard.dependencies import get_repository
from flashcard.logic.repository_questionnaires import QuestionnaireRepository
from flashcard.logic.sorting import Sort


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(include_in_schema=False, default_response_class=HTMLResponse)
logger = logging.getLogger(__name__)


def _list_url(request: Request) -> str:
    return request.url_for("questionnaires_page").path


@router.get("/", name="index_page")
def index_page(request: Request):
    return templates.TemplateResponse(request, "index.html", {"list_url": _list_url(request)})


@router.get("/questionnaires", name="questionnaires_page")
def questionnaires_page(
    request: Request,
    repository: QuestionnaireRepository = Depends(get_repository),
):
    list_url = _list_url(request)
    items = [
        {
            "title": q.title,
            "url": list_url + "/" + quote(q.id, safe=""),
        }
        for q in repository.find_all(Sort.by_id())
    ]
    return templates.TemplateResponse(request, "questionnaires.html", {"questionnaires": items})


@router.get("/questionnaires/{questionnaire_id}", name="questionnaire_page")
def questionnaire_page(
    questionnaire_id: str,
    request: Request,
    repository: QuestionnaireRepository = Depends(get_repository),
):
    questionnaire = repository.find_by_id(questionnaire_id)
    if questionnaire is None:
        logger.info("questionnaire_page.miss", extra={"questionnaire_id": questionnaire_id})
    return templates.TemplateResponse(
        request,
        "questionnaire.html",
        {"questionnaire": questionnaire, "list_url": _list_url(request)},
    )


@router.get("/{remainder:path}", name="fallback_page")
def fallback_page(remainder: str, request: Request):
    return index_page(request)
