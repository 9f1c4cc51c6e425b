"""Cart repository interface.

Every line mutation is a single storage-level statement scoped by cart,
never a read-modify-write of the whole cart, so concurrent requests from
the same user (two devices, double taps) cannot lose updates.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.cart.models import Cart, CartLine


class ICartRepository(IRepository["Cart"]):
    """Repository contract for the Cart aggregate (Cart + CartLines)."""

    @abstractmethod
    def get_by_owner(self, owner_id: int) -> Optional[Cart]:
        """The owner's cart, or ``None``."""

    @abstractmethod
    def get_or_create(self, owner_id: int) -> Cart:
        """The owner's cart, created empty if absent (race-safe)."""

    @abstractmethod
    def get_for_update(self, owner_id: int) -> Optional[Cart]:
        """The owner's cart with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def lines(self, cart_id: UUID) -> List[CartLine]:
        """Lines with their listings (deleted listings included)."""

    @abstractmethod
    def increment_line(self, cart_id: UUID, item_id: UUID, quantity: int) -> bool:
        """Atomically add *quantity* to an existing line.

        ``False`` if there is no line or the sum would exceed
        ``MAX_LINE_QUANTITY`` (the line is left as is)."""

    @abstractmethod
    def insert_line(self, cart_id: UUID, item_id: UUID, quantity: int) -> CartLine:
        """Insert a new line. Raises ``IntegrityError`` if it already exists."""

    @abstractmethod
    def set_line_quantity(self, cart_id: UUID, item_id: UUID, quantity: int) -> bool:
        """Overwrite a line's quantity; ``False`` if the line does not exist."""

    @abstractmethod
    def delete_line(self, cart_id: UUID, item_id: UUID) -> int:
        """Delete a line, returning the number of rows removed."""

    @abstractmethod
    def clear_lines(self, cart_id: UUID) -> int:
        """Delete every line of the cart."""

    @abstractmethod
    def touch(self, cart_id: UUID) -> None:
        """Bump ``version`` and ``updated_at`` after a mutation."""

    @abstractmethod
    def clear_if_version(self, cart_id: UUID, expected_version: int) -> bool:
        """Compare-and-swap clear: empty the cart only if ``version`` still
        equals *expected_version*. Returns ``False`` when the swap is lost."""
