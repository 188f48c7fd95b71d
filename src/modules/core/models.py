"""Shared model bases and the outbox table.

Catalog, cart and order rows keep integer keys because clients address
them by id.  Outbox rows are internal and use UUIDv7 keys, which sort by
creation time.
"""

from __future__ import annotations

from typing import List

import uuid6
from django.db import models
from django.utils import timezone

from shared.domain.events import DomainEvent


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        # auto_now is skipped when update_fields omits the column.
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "updated_at"]
        super().save(*args, **kwargs)


class BaseModel(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)

    class Meta:
        abstract = True


class EventStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PUBLISHED = "PUBLISHED", "Published"
    FAILED = "FAILED", "Failed"


class OutboxManager(models.Manager):
    def record(self, event: DomainEvent, topic: str) -> OutboxEvent:
        """Queue ``event``; call inside the transaction that changed the aggregate."""
        return self.create(
            event_type=event.event_name,
            aggregate_id=str(event.aggregate_id),
            payload=event.to_payload(),
            topic=topic,
        )

    def pending_ids(self, limit: int) -> List:
        """Oldest pending rows first."""
        return list(
            self.filter(status=EventStatus.PENDING)
            .order_by("created_at")
            .values_list("id", flat=True)[:limit]
        )

    def lock_pending(self, event_id) -> OutboxEvent | None:
        """Row-lock one event, or ``None`` when another worker already took it."""
        return (
            self.select_for_update()
            .filter(id=event_id, status=EventStatus.PENDING)
            .first()
        )


class OutboxEvent(BaseModel):
    """Order lifecycle event waiting to be relayed to in-process subscribers.

    Rows are written by the order repository in the same transaction as
    the order change; ``core.relay_outbox_events`` drains them.  A row
    moves PENDING -> PUBLISHED, or PENDING -> FAILED with the error kept
    in ``error_message``.
    """

    event_type = models.CharField(max_length=100)
    payload = models.JSONField()
    aggregate_id = models.CharField(max_length=255)
    topic = models.CharField(max_length=100)
    status = models.CharField(
        max_length=20,
        choices=EventStatus.choices,
        default=EventStatus.PENDING,
    )
    processed_at = models.DateTimeField(null=True, blank=True, default=None)
    error_message = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    retry_count = models.PositiveIntegerField(default=0)

    objects = OutboxManager()

    class Meta:
        db_table = "outbox_events"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["event_type"], name="outbox_event_type_idx"),
            models.Index(fields=["aggregate_id"], name="outbox_aggregate_id_idx"),
            models.Index(
                fields=["status", "created_at"], name="outbox_status_created_idx"
            ),
        ]

    def mark_as_published(self) -> None:
        self.status = EventStatus.PUBLISHED
        self.processed_at = timezone.now()
        self.save(update_fields=["status", "processed_at"])

    def mark_as_failed(self, error: str) -> None:
        self.status = EventStatus.FAILED
        self.error_message = error
        self.retry_count += 1
        self.save(update_fields=["status", "error_message", "retry_count"])

    def __str__(self) -> str:
        return f"{self.topic}/{self.event_type} #{self.aggregate_id} {self.status}"
