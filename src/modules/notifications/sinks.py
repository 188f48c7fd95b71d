"""Realtime notification broadcast.

Events are published as JSON on a Redis pub/sub channel; the websocket
gateway relays each message to every connected client.  Delivery is
fire-and-forget: nothing is persisted and events are not targeted at a
particular user.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

import structlog
from django.conf import settings
from django_redis import get_redis_connection
from redis.exceptions import RedisError

from modules.notifications.dtos import NotificationDTO
from modules.notifications.exceptions import NotificationDeliveryError

logger = structlog.get_logger(__name__)


class INotificationSink(ABC):
    @abstractmethod
    def broadcast(self, notification: NotificationDTO) -> None:
        """Deliver ``notification`` to all current subscribers."""


class RedisNotificationSink(INotificationSink):
    def __init__(
        self,
        channel: str | None = None,
        connection_factory: Callable[[], Any] | None = None,
    ) -> None:
        self._channel = channel or settings.NOTIFICATION_CHANNEL
        self._connection_factory = connection_factory or (
            lambda: get_redis_connection("default")
        )

    def broadcast(self, notification: NotificationDTO) -> None:
        try:
            receivers = self._connection_factory().publish(
                self._channel, notification.model_dump_json()
            )
        except RedisError as exc:
            raise NotificationDeliveryError(str(exc)) from exc
        logger.info(
            "notification.broadcast",
            channel=self._channel,
            notification_id=notification.id,
            receivers=receivers,
        )
