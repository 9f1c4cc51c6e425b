"""Unit tests for the order state machine.

Covers:
- Model helpers ``can_transition_to`` / ``is_terminal``.
- Every forward transition for an administrator.
- Skipped, reversed and terminal transitions are refused.
- History and outbox rows appended on every transition.
"""

from __future__ import annotations

import pytest

from modules.core.models import OutboxEvent
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from modules.orders.exceptions import InvalidTransition, UnknownStatus
from modules.orders.models import Order

pytestmark = pytest.mark.unit

ALL_STATUSES = [s.value for s in OrderStatus]


class TestTransitionTable:
    def test_forward_path(self):
        assert VALID_TRANSITIONS[OrderStatus.PENDING] == {
            OrderStatus.PROCESSING,
            OrderStatus.CANCELLED,
        }
        assert VALID_TRANSITIONS[OrderStatus.PROCESSING] == {OrderStatus.SHIPPED}
        assert VALID_TRANSITIONS[OrderStatus.SHIPPED] == {OrderStatus.DELIVERED}

    def test_terminal_states(self):
        assert TERMINAL_STATES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED}
        for state in TERMINAL_STATES:
            assert not VALID_TRANSITIONS.get(state)

    @pytest.mark.parametrize("status", ALL_STATUSES)
    def test_model_helpers_follow_table(self, status):
        order = Order(status=status)
        assert order.is_terminal is (status in TERMINAL_STATES)
        for target in ALL_STATUSES:
            expected = target in VALID_TRANSITIONS.get(status, set())
            assert order.can_transition_to(target) is expected


class TestAdminProgression:
    def test_full_lifecycle(self, order_service, placed_order, admin_user):
        path = (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED)
        for target in path:
            order = order_service.change_status(placed_order.id, admin_user, target)
            assert order.status == target

        history = list(order.status_history.all())
        assert [h.new_status for h in history] == [
            OrderStatus.PENDING,
            OrderStatus.PROCESSING,
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
        ]
        assert [h.old_status for h in history] == [
            None,
            OrderStatus.PENDING,
            OrderStatus.PROCESSING,
            OrderStatus.SHIPPED,
        ]
        assert all(h.changed_by_id == admin_user.pk for h in history[1:])

    def test_each_transition_records_an_event(
        self, order_service, placed_order, admin_user
    ):
        order_service.change_status(placed_order.id, admin_user, OrderStatus.PROCESSING)
        types = list(
            OutboxEvent.objects.filter(aggregate_id=str(placed_order.id))
            .order_by("created_at")
            .values_list("event_type", flat=True)
        )
        assert types == ["OrderCreated", "OrderStatusChanged"]

    @pytest.mark.parametrize(
        "target", [OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.PENDING]
    )
    def test_skipping_or_repeating_is_refused(
        self, order_service, placed_order, admin_user, target
    ):
        with pytest.raises(InvalidTransition):
            order_service.change_status(placed_order.id, admin_user, target)

        placed_order.refresh_from_db()
        assert placed_order.status == OrderStatus.PENDING
        assert placed_order.status_history.count() == 1

    def test_backwards_is_refused(self, order_service, placed_order, admin_user):
        order_service.change_status(placed_order.id, admin_user, OrderStatus.PROCESSING)
        with pytest.raises(InvalidTransition):
            order_service.change_status(
                placed_order.id, admin_user, OrderStatus.PENDING
            )

    def test_processing_cannot_be_cancelled(
        self, order_service, placed_order, admin_user
    ):
        order_service.change_status(placed_order.id, admin_user, OrderStatus.PROCESSING)
        with pytest.raises(InvalidTransition):
            order_service.change_status(
                placed_order.id, admin_user, OrderStatus.CANCELLED
            )

    @pytest.mark.parametrize("target", ALL_STATUSES)
    def test_terminal_orders_never_change(
        self, order_service, placed_order, admin_user, target
    ):
        order_service.change_status(placed_order.id, admin_user, OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransition):
            order_service.change_status(placed_order.id, admin_user, target)

    def test_unknown_status(self, order_service, placed_order, admin_user):
        with pytest.raises(UnknownStatus):
            order_service.change_status(placed_order.id, admin_user, "refunded")
