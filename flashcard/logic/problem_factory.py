"""Centralised construction of problem+json payloads.

Route modules build error bodies through these helpers instead of embedding
titles, codes and statuses inline.
"""

from __future__ import annotations

from typing import Dict
import logging


logger = logging.getLogger(__name__)


def _problem(title: str, status: int, detail: str, code: str) -> Dict[str, object]:
    problem = {
        "title": title,
        "status": status,
        "detail": detail,
        "code": code,
    }
    logger.info("error_handler.handle", extra={"code": code, "status": status})
    return problem


def problem_title_invalid(detail: str, code: str = "VALIDATION_TITLE_EMPTY") -> Dict[str, object]:
    """Return a 412 problem for a questionnaire rejected by the title rule."""
    return _problem("Precondition Failed", 412, detail, code)


def problem_id_invalid(detail: str) -> Dict[str, object]:
    """Return a 400 problem for a client-supplied id that is not a usable path segment."""
    return _problem("Bad Request", 400, detail, "VALIDATION_ID_INVALID")


def problem_sort_invalid(detail: str) -> Dict[str, object]:
    """Return a 400 problem for an unparseable `sort` query value."""
    return _problem("Bad Request", 400, detail, "QUERY_SORT_INVALID")


__all__ = ["problem_id_invalid", "problem_title_invalid", "problem_sort_invalid"]
