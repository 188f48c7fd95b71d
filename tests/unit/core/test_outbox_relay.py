"""Unit tests for the outbox relay task."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.core.tasks import relay_outbox_events
from modules.orders.events import OrderCreated
from modules.orders.handlers import order_created_handler

pytestmark = pytest.mark.unit


def _outbox(event):
    return OutboxEvent.objects.record(event, "orders")


class TestRelayOutboxEvents:
    def test_pending_events_are_published(self):
        row = _outbox(OrderCreated(aggregate_id=1))

        with patch.object(order_created_handler, "handle") as handle:
            result = relay_outbox_events()

        assert result == {"published": 1, "failed": 0}
        row.refresh_from_db()
        assert row.status == EventStatus.PUBLISHED
        assert row.processed_at is not None
        (event,), _ = handle.call_args
        assert isinstance(event, OrderCreated)
        assert event.aggregate_id == "1"

    def test_unknown_event_type_fails(self):
        row = OutboxEvent.objects.create(
            event_type="BookReviewed",
            aggregate_id="3",
            payload={},
            topic="catalog",
        )

        result = relay_outbox_events()

        assert result == {"published": 0, "failed": 1}
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED
        assert row.retry_count == 1
        assert "BookReviewed" in row.error_message

    def test_handler_error_marks_failed(self):
        row = _outbox(OrderCreated(aggregate_id=2))

        with patch.object(
            order_created_handler, "handle", side_effect=RuntimeError("boom")
        ):
            result = relay_outbox_events()

        assert result["failed"] == 1
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED
        assert row.error_message == "boom"

    def test_published_rows_are_not_replayed(self):
        _outbox(OrderCreated(aggregate_id=1))
        relay_outbox_events()

        assert relay_outbox_events() == {"published": 0, "failed": 0}

    def test_runs_through_celery(self):
        _outbox(OrderCreated(aggregate_id=1))

        result = relay_outbox_events.delay()

        assert result.successful()
        assert result.result["published"] == 1


class TestOutboxManager:
    def test_record_serialises_event(self):
        event = OrderCreated(aggregate_id=9)

        row = OutboxEvent.objects.record(event, "orders")

        assert row.status == EventStatus.PENDING
        assert row.event_type == "OrderCreated"
        assert row.aggregate_id == "9"
        assert row.payload["event_id"] == str(event.event_id)

    def test_pending_ids_skips_processed_rows(self):
        done = _outbox(OrderCreated(aggregate_id=1))
        done.mark_as_published()
        waiting = _outbox(OrderCreated(aggregate_id=2))

        assert OutboxEvent.objects.pending_ids(10) == [waiting.id]
        assert OutboxEvent.objects.lock_pending(done.id) is None
