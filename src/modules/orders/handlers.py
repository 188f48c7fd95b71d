"""Subscribers for order lifecycle events relayed from the outbox."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCancelled, OrderCompleted, OrderCreated
from shared.domain.bus import IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class OrderActivityHandler(IEventHandler[DomainEvent]):
    """Writes one structured audit line per relayed order event.

    ``activity`` becomes the event name in the log stream
    (``order.activity.placed`` and so on).
    """

    def __init__(self, activity: str) -> None:
        self.activity = activity

    def handle(self, event: DomainEvent) -> None:
        logger.info(
            f"order.activity.{self.activity}",
            order_id=str(event.aggregate_id),
            event_id=str(event.event_id),
            occurred_on=event.occurred_on.isoformat(),
        )


order_created_handler = OrderActivityHandler("placed")
order_cancelled_handler = OrderActivityHandler("cancelled")
order_completed_handler = OrderActivityHandler("collected")

SUBSCRIPTIONS = (
    (OrderCreated, order_created_handler),
    (OrderCancelled, order_cancelled_handler),
    (OrderCompleted, order_completed_handler),
)
