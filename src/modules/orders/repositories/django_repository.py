"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderItems) is persisted atomically.

Concurrency control on status updates uses ``select_for_update()``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.models import OutboxEvent
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

OUTBOX_TOPIC = "orders"


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` keys:
        - ``user_id`` (required)
        - ``items`` (required): list of dicts with ``book_id``,
          ``quantity``, ``unit_price``
        - ``total_amount``, ``discount_applied`` (required)
        - ``order_date`` (optional)
        """
        order = Order(
            user_id=data["user_id"],
            total_amount=data["total_amount"],
            discount_applied=data["discount_applied"],
        )
        if data.get("order_date"):
            order.order_date = data["order_date"]
        order.save()

        items = data.get("items", [])
        for item_data in items:
            OrderItem(
                order=order,
                book_id=item_data["book_id"],
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
            ).save()

        log = logger.bind(order_id=order.id, item_count=len(items))
        log.info("order.persisted")

        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: Any) -> Optional[Order]:
        """Retrieve an order with eager-loaded items.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("user")
                .prefetch_related("items")
                .filter(id=id)
                .first()
            )
        except (TypeError, ValueError, ValidationError):
            return None

    def get_by_claim_code(self, claim_code: str) -> Optional[Order]:
        return (
            Order.objects.select_related("user")
            .prefetch_related("items")
            .filter(claim_code=claim_code)
            .first()
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters and eager-loaded items.

        Supported filter keys are plain ORM look-ups, e.g.
        ``{"status": "Pending"}`` or ``{"user_id": ...}``.
        """
        queryset = Order.objects.select_related("user").prefetch_related("items")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def count_completed_for_user(self, user_id: str) -> int:
        return Order.objects.filter(
            user_id=user_id, status=OrderStatus.COMPLETED
        ).count()

    def list_completed_since(
        self, since: datetime, exclude_user_id: str
    ) -> List[Order]:
        return list(
            Order.objects.select_related("user")
            .filter(status=OrderStatus.COMPLETED, completed_at__gt=since)
            .exclude(user_id=exclude_user_id)
            .order_by("-completed_at", "-id")
        )

    # ------------------------------------------------------------------
    # Locked reads for status transitions
    # ------------------------------------------------------------------

    def get_for_update(self, id: Any) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def get_by_claim_code_for_update(self, claim_code: str) -> Optional[Order]:
        return (
            Order.objects.select_for_update()
            .filter(claim_code=claim_code)
            .first()
        )

    # ------------------------------------------------------------------
    # Save (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist an order and write its pending domain events to the outbox."""
        entity.save()

        events = entity.domain_events
        for event in events:
            OutboxEvent.objects.record(event, OUTBOX_TOPIC)
        entity.clear_domain_events()

        logger.info("order.saved", order_id=entity.id, event_count=len(events))
        return entity
