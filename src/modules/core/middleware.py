import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"


logger = structlog.get_logger(__name__)


def _incoming_request_id(request: HttpRequest) -> str:
    return request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Tag every log line of a request with one id and echo it to the caller.

    Clients (the storefront, the pickup desk) may send ``X-Request-ID``;
    otherwise a UUID4 is minted.  The id, method and path stay bound in
    structlog's context variables until the next request replaces them.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = _incoming_request_id(request)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=request_id,
            method=request.method,
            path=request.path,
        )

        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = round((time.monotonic() - started) * 1000, 2)

        log = logger.warning if response.status_code >= 500 else logger.info
        log("request_finished", status_code=response.status_code, duration_ms=elapsed_ms)

        response[REQUEST_ID_HEADER] = request_id
        return response
