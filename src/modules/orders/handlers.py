"""Event handlers for Orders domain events.

Handlers run when the outbox relay publishes an event; they stand in for
buyer notifications and only log.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from modules.core.money import format_money
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from shared.domain.bus import IEventBus, IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            "order.notification.created",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
            owner_id=event.owner_id,
            total=format_money(Decimal(event.total_amount)),
        )


class OrderCancelledHandler(IEventHandler[OrderCancelled]):
    def handle(self, event: OrderCancelled) -> None:
        logger.info(
            "order.notification.cancelled",
            order_id=str(event.aggregate_id),
            order_number=event.order_number,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.notification.status_changed",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


order_created_handler = OrderCreatedHandler()
order_cancelled_handler = OrderCancelledHandler()
order_status_changed_handler = OrderStatusChangedHandler()


def register_handlers(bus: IEventBus) -> None:
    """Subscribe the order handlers (called once from ``OrdersConfig.ready``)."""
    bus.subscribe(OrderCreated, order_created_handler)
    bus.subscribe(OrderCancelled, order_cancelled_handler)
    bus.subscribe(OrderStatusChanged, order_status_changed_handler)
