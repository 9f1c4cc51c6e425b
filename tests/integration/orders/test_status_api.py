"""Integration tests for ``PATCH /api/v1/orders/{id}/status``.

Rules exercised:
- Administrators walk the order forward: pending -> processing ->
  shipped -> delivered.
- Owners may only cancel, and only while the order is pending.
- Terminal orders (delivered / cancelled) never change again (409).
- Every accepted change appends history and an outbox event.
"""

from __future__ import annotations

import pytest

from modules.core.models import OutboxEvent
from modules.orders.models import Order

pytestmark = pytest.mark.integration


def _patch(client, order_id, status, **extra):
    return client.patch(
        f"/api/v1/orders/{order_id}/status",
        {"status": status, **extra},
        format="json",
    )


def _error_code(response) -> str:
    return response.json()["errors"][0]["code"]


@pytest.fixture()
def order(place_order, make_listing):
    return place_order((make_listing(price="4.00"), 2))


class TestAdminTransitions:
    def test_full_lifecycle(self, admin_client, order):
        for status in ("processing", "shipped", "delivered"):
            response = _patch(admin_client, order["id"], status)
            assert response.status_code == 200
            assert response.json()["status"] == status

        history = response.json()["statusHistory"]
        assert [(h["oldStatus"], h["newStatus"]) for h in history] == [
            (None, "pending"),
            ("pending", "processing"),
            ("processing", "shipped"),
            ("shipped", "delivered"),
        ]

    def test_notes_are_recorded(self, admin_client, order, admin_user):
        response = _patch(admin_client, order["id"], "processing", notes="Packed")
        latest = response.json()["statusHistory"][-1]
        assert latest["notes"] == "Packed"
        assert latest["changedBy"] == admin_user.pk

    def test_skipping_a_step_is_a_conflict(self, admin_client, order):
        response = _patch(admin_client, order["id"], "shipped")
        assert response.status_code == 409
        assert _error_code(response) == "invalid_transition"
        assert Order.objects.get(pk=order["id"]).status == "pending"

    def test_admin_cannot_cancel_after_processing(self, admin_client, order):
        _patch(admin_client, order["id"], "processing")
        response = _patch(admin_client, order["id"], "cancelled")
        assert response.status_code == 409

    def test_delivered_is_terminal(self, admin_client, order):
        for status in ("processing", "shipped", "delivered"):
            _patch(admin_client, order["id"], status)
        response = _patch(admin_client, order["id"], "cancelled")
        assert response.status_code == 409
        assert _error_code(response) == "invalid_transition"

    def test_events_recorded_for_each_change(self, admin_client, order):
        _patch(admin_client, order["id"], "processing")
        _patch(admin_client, order["id"], "shipped")
        event_types = list(
            OutboxEvent.objects.filter(aggregate_id=order["id"])
            .order_by("created_at", "id")
            .values_list("event_type", flat=True)
        )
        assert event_types == [
            "OrderCreated",
            "OrderStatusChanged",
            "OrderStatusChanged",
        ]


class TestOwnerCancellation:
    def test_owner_cancels_pending_order(self, auth_client, order):
        response = _patch(auth_client, order["id"], "cancelled")
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert OutboxEvent.objects.filter(event_type="OrderCancelled").count() == 1

    def test_owner_cannot_progress_order(self, auth_client, order):
        response = _patch(auth_client, order["id"], "processing")
        assert response.status_code == 403

    def test_owner_cannot_cancel_processing_order(
        self, auth_client, admin_client, order
    ):
        _patch(admin_client, order["id"], "processing")
        response = _patch(auth_client, order["id"], "cancelled")
        assert response.status_code == 409
        assert _error_code(response) == "invalid_transition"

    def test_cancelled_is_terminal(self, auth_client, admin_client, order):
        _patch(auth_client, order["id"], "cancelled")
        response = _patch(admin_client, order["id"], "processing")
        assert response.status_code == 409

    def test_stranger_cannot_cancel(self, other_client, order):
        response = _patch(other_client, order["id"], "cancelled")
        assert response.status_code == 403
        assert Order.objects.get(pk=order["id"]).status == "pending"


class TestStatusValidation:
    def test_unknown_status(self, admin_client, order):
        response = _patch(admin_client, order["id"], "teleported")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "status"

    def test_missing_status(self, admin_client, order):
        response = admin_client.patch(
            f"/api/v1/orders/{order['id']}/status", {}, format="json"
        )
        assert response.status_code == 400

    def test_unknown_order(self, admin_client):
        response = _patch(
            admin_client, "0190a6c4-0000-7000-8000-000000000000", "processing"
        )
        assert response.status_code == 404
