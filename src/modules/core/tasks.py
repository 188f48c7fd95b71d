"""Celery tasks owned by the core app."""

import structlog
from celery import shared_task
from django.db import transaction

from modules.core.models import OutboxEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

RELAY_BATCH_SIZE = 100


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = RELAY_BATCH_SIZE) -> dict:
    """Publish pending outbox events to the in-process event bus.

    Each row is handled in its own transaction under a row lock so two
    workers never publish it twice.  Rows nobody subscribes to, and rows
    whose handlers raise, end up ``FAILED``.
    """
    published = failed = 0
    for event_id in OutboxEvent.objects.pending_ids(batch_size):
        with transaction.atomic():
            outbox = OutboxEvent.objects.lock_pending(event_id)
            if outbox is None:
                continue

            log = logger.bind(
                outbox_id=str(outbox.id),
                event_type=outbox.event_type,
                aggregate_id=outbox.aggregate_id,
            )
            event_class = event_bus.event_class_for(outbox.event_type)
            if event_class is None:
                outbox.mark_as_failed(f"No handler registered for {outbox.event_type}.")
                log.warning("outbox.unroutable_event")
                failed += 1
                continue

            try:
                event_bus.publish(event_class.from_payload(outbox.payload))
            except Exception as exc:
                # Handlers are arbitrary code; record the failure on the row.
                outbox.mark_as_failed(str(exc))
                log.exception("outbox.publish_failed")
                failed += 1
                continue

            outbox.mark_as_published()
            log.info("outbox.published")
            published += 1

    logger.info("outbox.relay_finished", published=published, failed=failed)
    return {"published": published, "failed": failed}
