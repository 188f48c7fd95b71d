"""Integration tests for POST /api/Orders/CreateOrder.

Covers:
- End-to-end placement with the quantity discount, email and cart cleanup.
- Envelope on success and failure.
- 401 without a token, 400 for empty or invalid items.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.core import mail

from modules.carts.models import CartEntry
from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/Orders/CreateOrder"


def _payload(*lines):
    return {
        "items": [
            {"bookId": book_id, "quantity": qty, "unitPrice": price}
            for book_id, qty, price in lines
        ]
    }


class TestCreateOrderApi:
    def test_six_books_end_to_end(self, auth_client, user, book):
        CartEntry.objects.create(user=user, book=book, quantity=6)

        response = auth_client.post(URL, _payload((book.id, 6, "10.00")), format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["isSuccess"] is True
        assert body["statusCode"] == 200
        assert body["message"] == (
            "Order placed successfully. 5% quantity discount applied."
        )
        assert body["data"]["subtotal"] == "60.00"
        assert body["data"]["discount"] == "3.00"
        assert body["data"]["totalAmount"] == "57.00"

        order = Order.objects.get(claim_code=body["data"]["claimCode"])
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Decimal("57.00")
        assert order.discount_applied == Decimal("3.00")
        assert len(mail.outbox) == 1
        assert order.claim_code in mail.outbox[0].body
        assert not CartEntry.objects.filter(user=user).exists()

    def test_no_discount_message(self, auth_client, book):
        response = auth_client.post(URL, _payload((book.id, 1, "10.00")), format="json")
        assert response.json()["message"] == (
            "Order placed successfully. No discount applied."
        )

    def test_requires_token(self, api_client, book):
        response = api_client.post(URL, _payload((book.id, 1, "10.00")), format="json")

        assert response.status_code == 401
        body = response.json()
        assert body["isSuccess"] is False
        assert body["statusCode"] == 401
        assert body["data"] is None
        assert Order.objects.count() == 0

    def test_empty_items(self, auth_client):
        response = auth_client.post(URL, {"items": []}, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "Order must contain at least one item."

    def test_zero_book_id_rejects_whole_order(self, auth_client, book):
        response = auth_client.post(
            URL, _payload((book.id, 1, "10.00"), (0, 1, "10.00")), format="json"
        )

        assert response.status_code == 400
        assert response.json()["isSuccess"] is False
        assert Order.objects.count() == 0

    def test_unknown_book(self, auth_client):
        response = auth_client.post(URL, _payload((424242, 1, "10.00")), format="json")
        assert response.status_code == 400

    def test_zero_quantity_is_a_validation_error(self, auth_client, book):
        response = auth_client.post(URL, _payload((book.id, 0, "10.00")), format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid request."
        assert "items" in body["data"]

    def test_missing_items_field(self, auth_client):
        response = auth_client.post(URL, {}, format="json")
        assert response.status_code == 400
