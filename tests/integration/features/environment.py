"""Behave environment hooks for Questionnaire Service integration tests.

Integration scenarios run against a live API. Provide `TEST_BASE_URL`
(e.g. `http://127.0.0.1:8000`) pointing at a server started with
`python -m flashcard`; the hook fails fast when it is missing or unreachable.
"""

from __future__ import annotations

import os
from typing import Any

import httpx


def _require(name: str) -> str:
    val = os.environ.get(name)
    assert val and val.strip(), f"Environment variable {name} is required"
    return val.strip()


def before_all(context: Any) -> None:
    base_url = _require("TEST_BASE_URL").rstrip("/")
    try:
        with httpx.Client(timeout=5.0) as client:
            client.get(base_url + "/health")
    except httpx.HTTPError as exc:
        raise AssertionError(f"API not reachable at TEST_BASE_URL={base_url}: {exc}")
    context.base_url = base_url
    context.http = httpx.Client(base_url=base_url, timeout=10.0)


def before_scenario(context: Any, scenario: Any) -> None:
    context.created_ids = []
    context.response = None


def after_scenario(context: Any, scenario: Any) -> None:
    # Remove whatever the scenario created so runs stay repeatable
    for qid in getattr(context, "created_ids", []):
        context.http.delete(f"/questionnaires/{qid}")


def after_all(context: Any) -> None:
    http = getattr(context, "http", None)
    if http is not None:
        http.close()
