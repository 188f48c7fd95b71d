"""Unit tests for ``RedisNotificationSink`` with a mocked connection."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from modules.notifications.dtos import NotificationDTO, stable_notification_id
from modules.notifications.exceptions import NotificationDeliveryError
from modules.notifications.sinks import RedisNotificationSink

pytestmark = pytest.mark.unit


@pytest.fixture()
def notification():
    return NotificationDTO(
        type="Order",
        content="Order Completed",
        id=stable_notification_id("Order", 7, "Completed"),
        timestamp=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        title="Order Completed",
        description="Order for Ana Reader completed.",
    )


class TestRedisNotificationSink:
    def test_publishes_json_on_channel(self, notification):
        connection = MagicMock()
        connection.publish.return_value = 2
        sink = RedisNotificationSink(
            channel="test:notifications", connection_factory=lambda: connection
        )

        sink.broadcast(notification)

        channel, payload = connection.publish.call_args.args
        assert channel == "test:notifications"
        body = json.loads(payload)
        assert body["type"] == "Order"
        assert body["id"] == notification.id
        assert body["description"] == "Order for Ana Reader completed."

    def test_defaults_to_configured_channel(self, settings, notification):
        settings.NOTIFICATION_CHANNEL = "configured:channel"
        connection = MagicMock()

        RedisNotificationSink(connection_factory=lambda: connection).broadcast(
            notification
        )

        assert connection.publish.call_args.args[0] == "configured:channel"

    def test_redis_errors_are_wrapped(self, notification):
        connection = MagicMock()
        connection.publish.side_effect = RedisConnectionError("refused")
        sink = RedisNotificationSink(
            channel="x", connection_factory=lambda: connection
        )

        with pytest.raises(NotificationDeliveryError):
            sink.broadcast(notification)


class TestStableNotificationId:
    def test_same_inputs_same_id(self):
        assert stable_notification_id("Order", 1, "Completed") == (
            stable_notification_id("Order", 1, "Completed")
        )

    def test_differs_per_order_and_event(self):
        ids = {
            stable_notification_id("Order", 1, "Completed"),
            stable_notification_id("Order", 2, "Completed"),
            stable_notification_id("Order", 1, "Cancelled"),
        }
        assert len(ids) == 3
