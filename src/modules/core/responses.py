"""Standard response envelope for every API endpoint.

Every payload has the shape::

    {"isSuccess": bool, "message": str, "statusCode": int, "data": any}

``api_exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER`` so
framework-level failures (authentication, validation, throttling, unknown
routes) are rendered with the same envelope.  Exceptions DRF does not know
about are left to propagate.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def envelope(
    message: str,
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """Build a DRF ``Response`` wrapped in the standard envelope."""
    return Response(
        {
            "isSuccess": status.is_success(status_code),
            "message": message,
            "statusCode": status_code,
            "data": data,
        },
        status=status_code,
    )


def _message_from(exc: Exception, data: Any) -> str:
    if isinstance(exc, ValidationError):
        return "Invalid request."
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return str(exc)


def api_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """Render DRF exceptions with the standard envelope.

    Validation errors keep their field errors under ``data``; every other
    error carries ``data: null``.  Headers set by DRF (``WWW-Authenticate``,
    ``Retry-After``) are preserved because the original response is reused.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    response.data = {
        "isSuccess": False,
        "message": _message_from(exc, data),
        "statusCode": response.status_code,
        "data": data if isinstance(exc, ValidationError) else None,
    }
    logger.info(
        "api.request_rejected",
        status_code=response.status_code,
        error=exc.__class__.__name__,
    )
    return response
