from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from modules.orders.events import OrderCancelled, OrderCompleted, OrderCreated
from shared.infrastructure.bus import InMemoryEventBus, event_bus

pytestmark = pytest.mark.unit


class TestDomainEvents:
    def test_event_name_is_class_name(self):
        assert OrderCompleted(aggregate_id=5).event_name == "OrderCompleted"

    def test_payload_restores_event(self):
        original = OrderCancelled(aggregate_id=5)
        restored = OrderCancelled.from_payload(original.to_payload())
        assert restored.event_id == original.event_id
        assert restored.occurred_on == original.occurred_on
        assert restored.aggregate_id == "5"


class TestInMemoryEventBus:
    def test_publish_reaches_subscribers_of_that_class_only(self):
        bus = InMemoryEventBus()
        created, cancelled = MagicMock(), MagicMock()
        bus.subscribe(OrderCreated, created)
        bus.subscribe(OrderCancelled, cancelled)

        bus.publish(OrderCreated(aggregate_id=1))

        created.handle.assert_called_once()
        cancelled.handle.assert_not_called()

    def test_subscribing_twice_is_ignored(self):
        bus = InMemoryEventBus()
        handler = MagicMock()
        bus.subscribe(OrderCreated, handler)
        bus.subscribe(OrderCreated, handler)

        bus.publish(OrderCreated(aggregate_id=1))

        handler.handle.assert_called_once()

    def test_order_events_are_registered_at_startup(self):
        for name in ("OrderCreated", "OrderCancelled", "OrderCompleted"):
            assert event_bus.event_class_for(name) is not None
        assert event_bus.event_class_for("Unknown") is None


class TestOrderActivityHandler:
    def test_logs_activity_with_order_id(self):
        from modules.orders.handlers import order_completed_handler

        event = OrderCompleted(aggregate_id=12)
        with patch("modules.orders.handlers.logger") as logger:
            order_completed_handler.handle(event)

        (name,), fields = logger.info.call_args
        assert name == "order.activity.collected"
        assert fields["order_id"] == "12"
        assert fields["event_id"] == str(event.event_id)
