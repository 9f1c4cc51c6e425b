"""Cart and CartLine models.

Business rules implemented:
- One cart per user (``owner`` is unique and never reassigned).
- At most one line per listing in a cart (unique constraint), so
  concurrent adds merge into the same row.
- Line quantity is always within 1..MAX_LINE_QUANTITY (check constraints);
  a line is removed, never kept at zero.
- ``version`` is bumped on every mutation and guards the checkout clear
  (compare-and-swap).
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.cart.constants import MAX_LINE_QUANTITY
from modules.core.models import BaseModel


class Cart(BaseModel):
    """Server-side cart aggregate root."""

    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
    )
    version = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "carts"

    def __str__(self) -> str:
        return f"Cart of user {self.owner_id} (v{self.version})"


class CartLine(BaseModel):
    """(listing, quantity) pair. The stored cart holds no catalog fields."""

    cart = models.ForeignKey(
        "cart.Cart",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    food_item = models.ForeignKey(
        "catalog.FoodItem",
        on_delete=models.PROTECT,
        related_name="cart_lines",
    )
    quantity = models.PositiveIntegerField()

    class Meta:
        db_table = "cart_lines"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "food_item"],
                name="cart_lines_unique_item",
            ),
            models.CheckConstraint(
                check=models.Q(quantity__gte=1),
                name="cart_lines_quantity_positive",
            ),
            models.CheckConstraint(
                check=models.Q(quantity__lte=MAX_LINE_QUANTITY),
                name="cart_lines_quantity_capped",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.food_item_id} x{self.quantity}"
