"""Notification and mail DTOs.

``NotificationDTO`` is the wire shape of the realtime event broadcast to
connected clients and of the pull-model feed.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid5

from pydantic import BaseModel, ConfigDict

NOTIFICATION_NAMESPACE = UUID("8a4f2d61-93c7-5b0e-a1d4-6c2e7f905b3d")


def stable_notification_id(kind: str, aggregate_id: object, event: str) -> str:
    """Same (kind, aggregate, event) always yields the same id."""
    return str(uuid5(NOTIFICATION_NAMESPACE, f"{kind}:{aggregate_id}:{event}"))


class NotificationDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    content: str
    id: str
    timestamp: datetime
    title: str
    description: str


class OrderConfirmationMail(BaseModel):
    """Everything the order confirmation template needs."""

    model_config = ConfigDict(frozen=True)

    to_email: str
    full_name: str
    claim_code: str
    order_date: datetime
    total_books: int
    subtotal: Decimal
    discount: Decimal
    final_amount: Decimal
