"""Request correlation for the catalog API."""

import re
import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)

# Client supplied IDs end up in log lines and response headers.
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_request_id(raw: str) -> str:
    """Reuse a well-formed inbound ID, otherwise mint a UUID4."""
    if raw and _SAFE_REQUEST_ID.match(raw):
        return raw
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID and log its lifecycle.

    The ID is bound to structlog's context variables for the duration of
    the request, so every log line emitted while serving it carries the
    same ``correlation_id``; it is echoed back in ``X-Request-ID``.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = resolve_request_id(request.META.get("HTTP_X_REQUEST_ID", ""))
        token = correlation_id_var.set(cid)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        started = time.monotonic()
        logger.info("request_started")
        try:
            response = self.get_response(request)
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "request_finished",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )
            response[REQUEST_ID_HEADER] = cid
            return response
        finally:
            structlog.contextvars.clear_contextvars()
            correlation_id_var.reset(token)
