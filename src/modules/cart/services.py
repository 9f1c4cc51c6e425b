"""Cart service layer (Use Cases).

Add merges (quantities accumulate), update overwrites (exact value).
Both are intentional and tested independently. Every mutation first
locks the cart row (the same order checkout takes), then issues a scoped
single-row statement followed by a version bump; responses are rebuilt
through the catalog read-side join.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import structlog
from django.db import IntegrityError, transaction

from modules.cart.constants import MAX_LINE_QUANTITY
from modules.cart.dtos import CartView
from modules.cart.exceptions import (
    CartItemNotFound,
    CartLineNotFound,
    CartNotFound,
    InvalidQuantity,
)

if TYPE_CHECKING:
    from modules.cart.dtos import AddCartLineDTO, UpdateCartLineDTO
    from modules.cart.models import Cart
    from modules.cart.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import IFoodItemRepository

logger = structlog.get_logger(__name__)


class CartService:
    """Application service for cart use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        cart_repository: ICartRepository,
        food_item_repository: IFoodItemRepository,
    ) -> None:
        self._cart_repo = cart_repository
        self._food_item_repo = food_item_repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_cart(self, owner_id: int) -> CartView:
        """Return the owner's cart, creating an empty one if absent."""
        cart = self._cart_repo.get_or_create(owner_id)
        return self._view(cart)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_line(self, owner_id: int, dto: AddCartLineDTO) -> CartView:
        """Add ``dto.quantity`` of a listing, merging into an existing line.

        Raises:
            CartItemNotFound: listing does not exist or was deleted.
            InvalidQuantity: the merged line would exceed ``MAX_LINE_QUANTITY``.
        """
        log = logger.bind(owner_id=owner_id, item_id=str(dto.item_id))

        if not self._food_item_repo.get_by_id(str(dto.item_id)):
            log.warning("cart.item_not_found")
            raise CartItemNotFound(f"Food item {dto.item_id} not found.")

        self._cart_repo.get_or_create(owner_id)
        cart = self._cart_repo.get_for_update(owner_id)

        if not self._cart_repo.increment_line(cart.id, dto.item_id, dto.quantity):
            try:
                self._cart_repo.insert_line(cart.id, dto.item_id, dto.quantity)
            except IntegrityError:
                # The line exists: either a concurrent add created it first
                # or the merge would overflow the cap.
                if not self._cart_repo.increment_line(
                    cart.id, dto.item_id, dto.quantity
                ):
                    log.warning("cart.quantity_overflow", quantity=dto.quantity)
                    raise InvalidQuantity(
                        f"Quantity per item cannot exceed {MAX_LINE_QUANTITY}."
                    )
                log.info("cart.insert_race_merged")

        self._cart_repo.touch(cart.id)
        log.info("cart.line_added", quantity=dto.quantity)
        return self._view(self._cart_repo.get_by_owner(owner_id))

    @transaction.atomic
    def update_line(self, owner_id: int, dto: UpdateCartLineDTO) -> CartView:
        """Set a line's quantity exactly.

        Raises:
            InvalidQuantity: ``quantity <= 0`` (the cart is left unchanged).
            CartNotFound: the owner has no cart.
            CartLineNotFound: the cart has no line for the listing.
        """
        if dto.quantity <= 0:
            raise InvalidQuantity("Quantity must be positive.")

        cart = self._require_cart(owner_id)
        log = logger.bind(cart_id=str(cart.id), item_id=str(dto.item_id))

        if not self._cart_repo.set_line_quantity(cart.id, dto.item_id, dto.quantity):
            log.warning("cart.line_not_found")
            raise CartLineNotFound("Item not found in cart.")

        self._cart_repo.touch(cart.id)
        log.info("cart.line_updated", quantity=dto.quantity)
        return self._view(self._cart_repo.get_by_owner(owner_id))

    @transaction.atomic
    def remove_line(self, owner_id: int, item_id: str) -> CartView:
        """Remove a line. An absent line (or malformed id) is a no-op.

        Raises:
            CartNotFound: the owner has no cart.
        """
        cart = self._require_cart(owner_id)

        removed = 0
        parsed = _parse_uuid(item_id)
        if parsed is not None:
            removed = self._cart_repo.delete_line(cart.id, parsed)
        if removed:
            self._cart_repo.touch(cart.id)
            cart = self._cart_repo.get_by_owner(owner_id)

        logger.info("cart.line_removed", cart_id=str(cart.id), removed=removed)
        return self._view(cart)

    @transaction.atomic
    def clear(self, owner_id: int) -> None:
        """Empty the cart (the cart itself is kept). Idempotent.

        Raises:
            CartNotFound: the owner has no cart.
        """
        cart = self._require_cart(owner_id)
        removed = self._cart_repo.clear_lines(cart.id)
        self._cart_repo.touch(cart.id)
        logger.info("cart.cleared", cart_id=str(cart.id), removed=removed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_cart(self, owner_id: int) -> Cart:
        """Lock and return the owner's cart."""
        cart = self._cart_repo.get_for_update(owner_id)
        if not cart:
            raise CartNotFound(f"User {owner_id} has no cart.")
        return cart

    def _view(self, cart: Cart) -> CartView:
        return CartView.build(cart, self._cart_repo.lines(cart.id))


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None
