"""Integration tests for the order listing and look-up endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration


@pytest.fixture()
def pending_order(user, book):
    order = Order.objects.create(
        user=user, total_amount=Decimal("20.00"), discount_applied=Decimal("0.00")
    )
    OrderItem.objects.create(order=order, book=book, quantity=2, unit_price=Decimal("10.00"))
    return order


@pytest.fixture()
def completed_order(other_user, book):
    order = Order.objects.create(user=other_user, status=OrderStatus.COMPLETED)
    OrderItem.objects.create(order=order, book=book, quantity=1, unit_price=Decimal("10.00"))
    return order


class TestListings:
    def test_pending_orders_are_public(self, api_client, pending_order, completed_order):
        response = api_client.get("/api/Orders/ListPendingOrders")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Pending orders."
        assert [o["orderId"] for o in body["data"]] == [pending_order.id]
        assert body["data"][0]["items"][0]["bookId"] == pending_order.items.get().book_id
        assert body["data"][0]["items"][0]["unitPrice"] == "10.00"

    def test_completed_orders_are_public(self, api_client, pending_order, completed_order):
        response = api_client.get("/api/Orders/ListCompletedOrders")

        assert response.status_code == 200
        assert [o["orderId"] for o in response.json()["data"]] == [completed_order.id]

    def test_own_orders(self, auth_client, user, pending_order, completed_order):
        response = auth_client.get("/api/Orders/GetOrderById")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [o["orderId"] for o in data] == [pending_order.id]
        assert data[0]["userId"] == str(user.id)
        assert data[0]["claimCode"] == pending_order.claim_code

    def test_own_orders_require_token(self, api_client):
        response = api_client.get("/api/Orders/GetOrderById")
        assert response.status_code == 401


class TestGetOrderByCode:
    def test_found_without_token(self, api_client, pending_order):
        response = api_client.get(f"/api/Orders/GetOrderByCode/{pending_order.claim_code}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["orderId"] == pending_order.id
        assert data["status"] == "Pending"
        assert data["totalAmount"] == "20.00"

    def test_unknown_code(self, api_client):
        response = api_client.get("/api/Orders/GetOrderByCode/ZZZZZZZZ")

        assert response.status_code == 404
        body = response.json()
        assert body["isSuccess"] is False
        assert body["message"] == "Order not found."
