"""Performance regression tests: constant query count (N+1 prevention).

Verifies that order listings execute a bounded number of SQL queries
regardless of the number of records, proving that ``select_related`` /
``prefetch_related`` are correctly applied.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from modules.catalog.models import Book
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.performance


@pytest.fixture()
def orders_with_items(user):
    books = [
        Book.objects.create(
            title=f"Book {i}", isbn=f"perf-{i}", author="A", price=Decimal("10.00")
        )
        for i in range(3)
    ]
    for _ in range(10):
        order = Order.objects.create(user=user)
        for book in books:
            OrderItem.objects.create(
                order=order, book=book, quantity=1, unit_price=book.price
            )


class TestOrderListQueryCount:
    def test_pending_listing_is_constant(self, api_client, orders_with_items):
        with CaptureQueriesContext(connection) as ctx:
            response = api_client.get("/api/Orders/ListPendingOrders")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 10
        # orders (+ user join) and one prefetch for items
        assert len(ctx.captured_queries) <= 3

    def test_own_orders_listing_is_constant(self, auth_client, orders_with_items):
        with CaptureQueriesContext(connection) as ctx:
            response = auth_client.get("/api/Orders/GetOrderById")

        assert response.status_code == 200
        assert len(ctx.captured_queries) <= 3
