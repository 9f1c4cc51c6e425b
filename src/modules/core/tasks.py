"""Async tasks for the core module."""

import structlog
from celery import shared_task
from django.conf import settings
from django.db import transaction
from django.db.models import Q

from modules.core.models import EventStatus, OutboxEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size=None):
    """Publish pending outbox events to the in-process event bus.

    Events are taken in creation order. Failed events are retried until
    ``OUTBOX_MAX_RETRIES`` is reached. Rows are locked (``SKIP LOCKED``
    where the database supports it) so concurrent workers never relay the
    same event twice.
    """
    batch_size = batch_size or settings.OUTBOX_BATCH_SIZE
    published = failed = 0

    with transaction.atomic():
        events = list(
            OutboxEvent.objects.select_for_update(skip_locked=True)
            .filter(
                Q(status=EventStatus.PENDING)
                | Q(
                    status=EventStatus.FAILED,
                    retry_count__lt=settings.OUTBOX_MAX_RETRIES,
                )
            )
            .order_by("created_at")[:batch_size]
        )

        for outbox_event in events:
            log = logger.bind(
                outbox_event_id=str(outbox_event.id),
                event_type=outbox_event.event_type,
                aggregate_id=outbox_event.aggregate_id,
            )
            event_class = event_bus.resolve(outbox_event.event_type)
            if event_class is None:
                outbox_event.mark_as_failed("No handler registered for event type.")
                log.warning("outbox.unroutable_event")
                failed += 1
                continue
            try:
                with transaction.atomic():
                    event_bus.publish(event_class.from_payload(outbox_event.payload))
            except Exception as exc:
                outbox_event.mark_as_failed(str(exc))
                log.exception("outbox.publish_failed")
                failed += 1
                continue
            outbox_event.mark_as_published()
            published += 1

    logger.info("outbox.relay_completed", published=published, failed=failed)
    return {"published": published, "failed": failed}
