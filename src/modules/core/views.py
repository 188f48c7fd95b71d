"""Liveness/readiness probe.

``GET /health`` answers 200 when the database and the cache (Redis in
production, which also carries the notification channel) respond, and
503 otherwise.  It is a plain Django view so it keeps working when DRF
authentication or throttling is misconfigured.
"""

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)

PROBE_KEY = "bookstore:health"


def _ping_database() -> None:
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set(PROBE_KEY, "ok", 10)
    if cache.get(PROBE_KEY) != "ok":
        raise ConnectionError("cache round-trip returned a stale value")


PROBES: Dict[str, Callable[[], None]] = {
    "database": _ping_database,
    "cache": _ping_cache,
}


def _run(name: str, probe: Callable[[], None]) -> Dict[str, Any]:
    started = time.monotonic()
    try:
        probe()
    except (DatabaseError, ConnectionError, OSError) as exc:
        logger.error("health.probe_failed", probe=name, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - started) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services = {name: _run(name, probe) for name, probe in PROBES.items()}
    healthy = all(result["status"] == "up" for result in services.values())
    state = "healthy" if healthy else "unhealthy"

    logger.info("health.checked", status=state)
    return JsonResponse(
        {
            "status": state,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
