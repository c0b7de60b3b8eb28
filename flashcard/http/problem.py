"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type, the handler callables and the middleware that
produce application/problem+json responses.
"""

from __future__ import annotations

import logging
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


class ProblemResponse(JSONResponse):
    media_type = PROBLEM_MEDIA_TYPE


def problem_response(problem: dict, headers: dict[str, str] | None = None) -> ProblemResponse:
    return ProblemResponse(problem, status_code=int(problem.get("status", 500)), headers=headers)


async def handle_http_exception(request: Request, exc: HTTPException) -> Response:  # noqa: D401
    status_code = int(exc.status_code)
    headers = dict(exc.headers) if exc.headers else None
    if status_code in (204, 304):
        return Response(status_code=status_code, headers=headers)
    if isinstance(exc.detail, dict):
        problem = exc.detail
    else:
        problem = {"title": "Error", "status": status_code, "detail": str(exc.detail)}
    return ProblemResponse(problem, status_code=status_code, headers=headers)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "errors": jsonable_encoder(exc.errors()),
    }
    logger.info("request_validation_failed path=%s", request.url.path)
    return ProblemResponse(problem, status_code=422)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error(
        "unexpected_error method=%s path=%s request_id=%s",
        request.method,
        request.url.path,
        getattr(request.state, "request_id", None),
        exc_info=exc,
    )
    return ProblemResponse({"title": "Internal Server Error", "status": 500}, status_code=500)


class UnexpectedErrorMiddleware:
    """Turn uncaught exceptions into the 500 problem response.

    Registered innermost so the request id and CORS middleware still decorate
    the error response. Exceptions raised after the response has started are
    re-raised for the server to handle.
    """

    def __init__(self, app) -> None:  # type: ignore[no-untyped-def]
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        started = False

        async def send_wrapper(message):  # type: ignore[no-untyped-def]
            nonlocal started
            if message.get("type") == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if started:
                raise
            response = await handle_unexpected_error(Request(scope), exc)
            await response(scope, receive, send)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "ProblemResponse",
    "problem_response",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
    "UnexpectedErrorMiddleware",
]
