import uuid

import pytest
import structlog

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_echoes_client_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="till-7-checkout")
        assert response["X-Request-ID"] == "till-7-checkout"

    def test_generates_request_id_when_missing(self, client):
        request_id = client.get("/health")["X-Request-ID"]
        assert uuid.UUID(request_id).version == 4

    def test_ids_differ_between_requests(self, client):
        first = client.get("/health")["X-Request-ID"]
        second = client.get("/health")["X-Request-ID"]
        assert first != second

    def test_request_context_is_bound_for_logging(self, api_client, book):
        path = f"/api/Book/GetBookById/{book.id}"
        api_client.get(path, HTTP_X_REQUEST_ID="order-desk-42")

        bound = structlog.contextvars.get_contextvars()
        assert bound["correlation_id"] == "order-desk-42"
        assert bound["method"] == "GET"
        assert bound["path"] == path
