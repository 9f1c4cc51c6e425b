"""Cart DTOs for the Service Layer.

- ``AddCartLineDTO`` / ``UpdateCartLineDTO``: command inputs.
- ``CartView`` / ``CartLineView``: read-side join of the stored cart with
  the catalog, built fresh on every response.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.cart.constants import MAX_LINE_QUANTITY
from modules.core.money import line_subtotal, total

if TYPE_CHECKING:
    from modules.cart.models import Cart, CartLine


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class AddCartLineDTO(BaseModel):
    """Add ``quantity`` units of a listing (merges into an existing line)."""

    model_config = ConfigDict(frozen=True)

    item_id: UUID
    quantity: int = Field(default=1, le=MAX_LINE_QUANTITY)

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class UpdateCartLineDTO(BaseModel):
    """Set the exact quantity of a line. Non-positive values are rejected
    by the service so the cart is left untouched."""

    model_config = ConfigDict(frozen=True)

    item_id: UUID
    quantity: int = Field(le=MAX_LINE_QUANTITY)


# ---------------------------------------------------------------------------
# Read-side join
# ---------------------------------------------------------------------------


class CartLineView(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: UUID
    quantity: int
    available: bool
    title: str
    producer: str
    image_uri: str
    unit_price: Optional[Decimal]
    subtotal: Optional[Decimal]

    @classmethod
    def from_line(cls, line: CartLine) -> CartLineView:
        """Resolve a line against its listing.

        A deleted listing yields ``available=False`` and no price.
        """
        item = line.food_item
        available = not item.is_deleted
        return cls(
            item_id=item.id,
            quantity=line.quantity,
            available=available,
            title=item.title,
            producer=item.producer,
            image_uri=item.image_uri,
            unit_price=item.price if available else None,
            subtotal=line_subtotal(item.price, line.quantity) if available else None,
        )


class CartView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    owner_id: int
    lines: List[CartLineView]
    item_count: int
    total_amount: Decimal
    version: int
    updated_at: datetime

    @classmethod
    def build(cls, cart: Cart, lines: List[CartLine]) -> CartView:
        views = [CartLineView.from_line(line) for line in lines]
        available = [v for v in views if v.available]
        return cls(
            id=cart.id,
            owner_id=cart.owner_id,
            lines=views,
            item_count=sum(v.quantity for v in available),
            total_amount=total(v.subtotal for v in available),
            version=cart.version,
            updated_at=cart.updated_at,
        )
