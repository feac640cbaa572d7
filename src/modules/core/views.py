"""Framework-level views: health probe and JSON fallbacks for Django errors."""

import time
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.exception_handler import unexpected_error_body

logger = structlog.get_logger(__name__)

_STARTED_AT = time.monotonic()


def _probe_database(alias: str = "default") -> Dict[str, Any]:
    started = time.monotonic()
    conn = connections[alias]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "vendor": conn.vendor,
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Liveness + database reachability; 503 when the database is down."""
    services: Dict[str, Dict[str, Any]] = {}
    try:
        services["database"] = _probe_database()
    except DatabaseError as exc:
        services["database"] = {"status": "down"}
        logger.error("health_check.database_down", error=str(exc))

    healthy = all(s["status"] == "up" for s in services.values())
    state = "healthy" if healthy else "unhealthy"
    logger.info("health_check.completed", status=state)

    return JsonResponse(
        {
            "status": state,
            "timestamp": timezone.now().isoformat(),
            "uptime_seconds": round(time.monotonic() - _STARTED_AT, 2),
            "debug": settings.DEBUG,
            "services": services,
        },
        status=200 if healthy else 503,
    )


def route_not_found(request: HttpRequest, exception: Exception) -> JsonResponse:
    """``handler404``: unknown routes answer in the API's JSON error format."""
    logger.info("route_not_found", path=request.path)
    return JsonResponse(
        {
            "error": "Route not found",
            "message": f"Route not found: {request.path}",
        },
        status=404,
    )


def server_error(request: HttpRequest) -> JsonResponse:
    """``handler500``: errors raised outside DRF views."""
    return JsonResponse(unexpected_error_body(), status=500)
