"""DRF exception handler producing the API's JSON error format.

Every failure body has at least::

    {"error": "<short category>", "message": "<human readable detail>"}

- ``DomainError`` subclasses map through their ``status_code`` / ``title`` /
  ``kind`` attributes.
- Pydantic request-DTO errors become 400 with per-field ``details``.
- ``RepositoryError`` becomes 500 (503 when the store is unreachable).
- DRF's own exceptions (malformed JSON, 405, ...) keep their status code and
  are reshaped into the same format.
- Anything else is a 500; its message and stack are only exposed when
  ``DEBUG`` is on.
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from modules.core.exceptions import DomainError, RepositoryError

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An internal server error occurred."


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Entry point registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``."""
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if isinstance(exc, DomainError):
        logger.warning(
            "api.domain_error",
            kind=exc.kind,
            status_code=exc.status_code,
            error=str(exc),
            view=view_name,
        )
        body = {"error": exc.title, "message": str(exc), "kind": exc.kind}
        body.update(exc.extra())
        return _error_response(body, exc.status_code)

    if isinstance(exc, PydanticValidationError):
        details = _pydantic_details(exc)
        logger.warning("api.invalid_request", details=details, view=view_name)
        return _error_response(
            {
                "error": "Invalid data",
                "message": "; ".join(details),
                "kind": "validation_error",
                "details": details,
            },
            status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, RepositoryError):
        logger.error(
            "api.repository_error",
            error=str(exc),
            unavailable=exc.unavailable,
            view=view_name,
        )
        return _error_response(
            {"error": exc.title, "message": str(exc), "kind": exc.kind},
            exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        response.data = _reshape_drf_error(response)
        return response

    logger.error("api.unhandled_error", view=view_name, exc_info=exc)
    return _error_response(
        unexpected_error_body(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def unexpected_error_body(exc: Optional[BaseException] = None) -> Dict[str, Any]:
    """Body for a 500 answer; diagnostic details only in development mode."""
    body: Dict[str, Any] = {
        "error": "Internal server error",
        "message": GENERIC_ERROR_MESSAGE,
    }
    if settings.DEBUG and exc is not None:
        body["message"] = str(exc) or type(exc).__name__
        body["stack"] = traceback.format_exception(
            type(exc), exc, exc.__traceback__
        )
    return body


def _error_response(body: Dict[str, Any], status_code: int) -> Response:
    set_rollback()
    return Response(body, status=status_code)


def _pydantic_details(exc: PydanticValidationError) -> List[str]:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        details.append(f"{location}: {message}" if location else message)
    return details


def _reshape_drf_error(response: Response) -> Dict[str, Any]:
    data = response.data
    if isinstance(data, dict) and set(data) == {"detail"}:
        return {"error": response.status_text, "message": str(data["detail"])}
    return {
        "error": response.status_text,
        "message": "Invalid request.",
        "details": data,
    }
