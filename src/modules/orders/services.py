"""Order service layer (Use Cases).

Checkout is the only transactional boundary that turns a cart into an
order. Status changes run the order state machine with ownership and
administrative rules.

Business rules enforced:
- Checkout needs a non-empty cart whose listings are all still live.
- Prices are snapshotted at checkout; the total is exact ``Decimal``.
- Order creation and the cart clear commit together. The clear is a
  compare-and-swap on the cart version taken under the row lock, so a
  duplicate submission either sees an empty cart or aborts whole.
- A retried checkout with the same ``Idempotency-Key`` returns the
  original order.
- Owners may only cancel, and only while ``pending``; administrators
  drive progression. Everyone else is refused.
- Every transition appends history and records an outbox event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import structlog
from django.db import transaction

from modules.core.permissions import is_admin
from modules.orders.constants import OWNER_ALLOWED_TARGETS, OrderStatus
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.exceptions import (
    CheckoutConflict,
    EmptyCart,
    InvalidTransition,
    ItemUnavailable,
    OrderAccessDenied,
    OrderNotFound,
    OwnerMismatch,
    UnknownStatus,
)

if TYPE_CHECKING:
    from django.db import models

    from modules.cart.repositories.interfaces import ICartRepository
    from modules.orders.dtos import CheckoutDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        cart_repository: ICartRepository,
    ) -> None:
        self._order_repo = order_repository
        self._cart_repo = cart_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def checkout(self, dto: CheckoutDTO) -> Tuple[Order, bool]:
        """Create an order from the owner's cart and empty the cart.

        Returns ``(order, created)``; ``created`` is ``False`` when an
        earlier checkout with the same idempotency key is replayed.

        Steps:
        1. Lock the owner's cart row (SELECT FOR UPDATE).
        2. Replay the order stored under the idempotency key, if any.
        3. Resolve every line against the catalog.
        4. Snapshot prices and create the ``pending`` order + history.
        5. Clear the cart guarded by the locked version.
        6. Record ``OrderCreated`` in the outbox.

        Raises:
            EmptyCart: no cart or no lines.
            ItemUnavailable: a line points at a deleted listing.
            OwnerMismatch: the payload names another user.
            CheckoutConflict: the cart changed underneath the checkout.
        """
        log = logger.bind(owner_id=dto.owner_id)
        log.info("checkout.started")

        claimed = dto.claimed_owner_id
        if claimed is not None and claimed != str(dto.owner_id):
            log.warning("checkout.owner_mismatch")
            raise OwnerMismatch("Order owner does not match the authenticated user.")

        # 1. Lock first, so a concurrent retry waits and then replays
        cart = self._cart_repo.get_for_update(dto.owner_id)

        # 2. Idempotency check
        if dto.idempotency_key:
            existing = self._order_repo.get_by_idempotency_key(
                dto.owner_id, dto.idempotency_key
            )
            if existing:
                log.info("checkout.idempotency_hit", order_id=str(existing.id))
                return existing, False

        lines = self._cart_repo.lines(cart.id) if cart else []
        if not lines:
            log.info("checkout.empty_cart")
            raise EmptyCart("Your cart is empty.")

        # 3. Resolve against the catalog (deleted listings block checkout)
        unavailable = [
            line.food_item.title for line in lines if line.food_item.is_deleted
        ]
        if unavailable:
            log.warning("checkout.items_unavailable", count=len(unavailable))
            raise ItemUnavailable(unavailable)

        # 4. Snapshot + create
        snapshots: List[Dict[str, Any]] = [
            {
                "food_item_id": line.food_item_id,
                "title": line.food_item.title,
                "producer": line.food_item.producer,
                "image_uri": line.food_item.image_uri,
                "unit_price": line.food_item.price,
                "quantity": line.quantity,
            }
            for line in lines
        ]
        shipping = dto.shipping
        order = self._order_repo.create(
            {
                "owner_id": dto.owner_id,
                "payment_method": dto.payment_method,
                "idempotency_key": dto.idempotency_key,
                "lines": snapshots,
                "full_name": shipping.full_name,
                "address": shipping.address,
                "city": shipping.city,
                "state": shipping.state,
                "zip_code": shipping.zip_code,
                "phone": shipping.phone,
            }
        )
        self._order_repo.add_history(
            order_id=order.id,
            status=OrderStatus.PENDING,
            changed_by_id=dto.owner_id,
            notes="Order created",
        )
        log = log.bind(order_id=str(order.id), order_number=order.order_number)

        if dto.client_total is not None and dto.client_total != order.total_amount:
            log.warning(
                "checkout.client_total_mismatch",
                client_total=str(dto.client_total),
                total_amount=str(order.total_amount),
            )

        # 5. Guarded clear; losing the swap rolls back the whole checkout
        if not self._cart_repo.clear_if_version(cart.id, cart.version):
            log.warning("checkout.conflict")
            raise CheckoutConflict("Your cart changed during checkout. Please retry.")

        # 6. Outbox
        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                order_number=order.order_number,
                owner_id=dto.owner_id,
                total_amount=str(order.total_amount),
                line_count=len(snapshots),
            )
        )
        self._order_repo.save(order)

        log.info("checkout.completed", total_amount=str(order.total_amount))
        return self._order_repo.get_by_id(str(order.id)) or order, True

    @transaction.atomic
    def change_status(
        self,
        order_id: str,
        actor: Any,
        new_status: str,
        notes: str = "",
    ) -> Order:
        """Transition an order to *new_status* on behalf of *actor*.

        Acquires a row-level lock before validating the transition.

        Raises:
            UnknownStatus: *new_status* is not an order status.
            OrderNotFound: order does not exist.
            OrderAccessDenied: actor is neither owner nor admin, or an owner
                asked for anything but a cancellation.
            InvalidTransition: the transition is not in the table.
        """
        if new_status not in OrderStatus.values:
            raise UnknownStatus(f"Unknown order status '{new_status}'.")

        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        admin = is_admin(actor)
        log = logger.bind(
            order_id=str(order.id),
            actor_id=actor.pk,
            current_status=order.status,
            new_status=new_status,
        )

        if not admin and order.owner_id != actor.pk:
            log.warning("order.status_forbidden")
            raise OrderAccessDenied("You cannot change the status of this order.")

        if order.is_terminal:
            log.warning("order.invalid_transition")
            raise InvalidTransition(
                f"Order is {order.status}; its status can no longer change."
            )

        if not admin and new_status not in OWNER_ALLOWED_TARGETS:
            log.warning("order.status_forbidden")
            raise OrderAccessDenied("Only administrators can progress an order.")

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidTransition(
                f"Cannot transition from {order.status} to {new_status}."
            )

        old_status = order.status
        order.status = new_status
        if new_status == OrderStatus.CANCELLED:
            event = OrderCancelled(
                aggregate_id=order.id,
                order_number=order.order_number,
                changed_by_id=actor.pk,
            )
        else:
            event = OrderStatusChanged(
                aggregate_id=order.id,
                order_number=order.order_number,
                old_status=old_status,
                new_status=new_status,
                changed_by_id=actor.pk,
            )
        order.add_domain_event(event)
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=order.id,
            status=new_status,
            old_status=old_status,
            changed_by_id=actor.pk,
            notes=notes,
        )

        log.info("order.status_updated")
        return self._order_repo.get_by_id(str(order.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str, actor: Any) -> Order:
        """Retrieve an order visible to *actor*.

        Raises:
            OrderNotFound: the order does not exist (or malformed id).
            OrderAccessDenied: actor is neither owner nor admin.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if order.owner_id != actor.pk and not is_admin(actor):
            logger.warning(
                "order.access_denied", order_id=str(order.id), actor_id=actor.pk
            )
            raise OrderAccessDenied("You do not have access to this order.")
        return order

    def list_user_orders(self, owner_id: int) -> List[Order]:
        """The owner's orders, newest first."""
        return self._order_repo.list_for_owner(owner_id)

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """Every order (administrative listing)."""
        return self._order_repo.list(filters)
