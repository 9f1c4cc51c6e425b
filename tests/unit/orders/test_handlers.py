"""Unit tests for Orders event handlers and their registration."""

from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.handlers import (
    OrderCancelledHandler,
    OrderCreatedHandler,
    OrderStatusChangedHandler,
    register_handlers,
)
from shared.infrastructure.bus import InMemoryEventBus, event_bus

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("handler", "event", "expected"),
    [
        (
            OrderCreatedHandler(),
            OrderCreated(aggregate_id=uuid4(), order_number="ORD-1"),
            "order.notification.created",
        ),
        (
            OrderCancelledHandler(),
            OrderCancelled(aggregate_id=uuid4(), order_number="ORD-2"),
            "order.notification.cancelled",
        ),
        (
            OrderStatusChangedHandler(),
            OrderStatusChanged(
                aggregate_id=uuid4(), old_status="pending", new_status="processing"
            ),
            "order.notification.status_changed",
        ),
    ],
)
def test_handlers_log_notification(caplog, handler, event, expected):
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        handler.handle(event)

    assert any(expected in record.getMessage() for record in caplog.records)


def test_register_handlers_makes_events_resolvable():
    bus = InMemoryEventBus()
    register_handlers(bus)

    assert bus.resolve("OrderCreated") is OrderCreated
    assert bus.resolve("OrderCancelled") is OrderCancelled
    assert bus.resolve("OrderStatusChanged") is OrderStatusChanged
    assert bus.resolve("Unknown") is None


def test_register_handlers_is_idempotent():
    bus = InMemoryEventBus()
    handled = []

    class Capturing:
        def handle(self, event) -> None:
            handled.append(event)

    capturing = Capturing()
    bus.subscribe(OrderCreated, capturing)
    bus.subscribe(OrderCreated, capturing)
    bus.publish(OrderCreated(aggregate_id=uuid4()))

    assert len(handled) == 1


def test_global_bus_is_wired_at_startup():
    assert event_bus.resolve("OrderCreated") is OrderCreated


def test_created_notification_formats_total(caplog):
    event = OrderCreated(
        aggregate_id=uuid4(), order_number="ORD-3", total_amount="1234.50"
    )
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderCreatedHandler().handle(event)

    assert any("$1,234.50" in record.getMessage() for record in caplog.records)
