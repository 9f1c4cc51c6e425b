"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Write operations run inside ``transaction.atomic()`` so the Order
aggregate (Order + OrderLines) is persisted as a unit, and domain events
collected on the aggregate are written to the outbox in the same
transaction.

Concurrency control on status updates uses ``select_for_update()``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.models import OutboxEvent
from modules.core.money import total
from modules.orders.models import Order, OrderLine, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

SHIPPING_FIELDS = ("full_name", "address", "city", "state", "zip_code", "phone")


def scoped_idempotency_key(owner_id: int, key: str) -> str:
    """Keys are unique per owner: two users may reuse the same client key."""
    return f"{owner_id}:{key}"


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        key = data.get("idempotency_key")
        order = Order(
            owner_id=data["owner_id"],
            payment_method=data["payment_method"],
            idempotency_key=scoped_idempotency_key(data["owner_id"], key)
            if key
            else None,
            **{field: data[field] for field in SHIPPING_FIELDS},
        )
        order.save()

        lines = []
        for line_data in data["lines"]:
            line = OrderLine(
                order=order,
                food_item_id=line_data["food_item_id"],
                title=line_data["title"],
                producer=line_data["producer"],
                image_uri=line_data.get("image_uri", ""),
                unit_price=line_data["unit_price"],
                quantity=line_data["quantity"],
            )
            line.save()
            lines.append(line)

        order.total_amount = total(line.subtotal for line in lines)
        order.save(update_fields=["total_amount", "updated_at"])

        logger.info("order.created", order_id=str(order.id), line_count=len(lines))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _with_relations(self) -> models.QuerySet:
        return Order.objects.select_related("owner").prefetch_related(
            "lines", "status_history"
        )

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or malformed ids."""
        try:
            return self._with_relations().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Order.objects.select_related("owner")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset.order_by("-order_date", "-id")

    def list_for_owner(self, owner_id: int) -> List[Order]:
        return list(
            self._with_relations()
            .filter(owner_id=owner_id)
            .order_by("-order_date", "-id")
        )

    def get_by_idempotency_key(self, owner_id: int, key: str) -> Optional[Order]:
        return (
            self._with_relations()
            .filter(idempotency_key=scoped_idempotency_key(owner_id, key))
            .first()
        )

    # ------------------------------------------------------------------
    # Save (IRepository contract) + outbox
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist an order and flush its domain events to the outbox."""
        entity.save()

        events = entity.domain_events
        for event in events:
            OutboxEvent.record(event, topic="orders")
        entity.clear_domain_events()

        logger.info("order.saved", order_id=str(entity.id), event_count=len(events))
        return entity

    @transaction.atomic
    def add_history(
        self,
        order_id: Any,
        status: str,
        old_status: Optional[str] = None,
        changed_by_id: Optional[int] = None,
        notes: str = "",
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order_id=order_id,
            old_status=old_status,
            new_status=status,
            changed_by_id=changed_by_id,
            notes=notes,
        )
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=status,
        )
        return history
