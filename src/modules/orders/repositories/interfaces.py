"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the Order aggregate
needs: atomic creation with its line snapshots, status history, row
locking for transitions and idempotency-key look-up.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes OrderLine snapshots and OrderStatusHistory
    records. Mutations must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its line snapshots atomically.

        ``data`` must include ``owner_id``, ``payment_method``, the six
        shipping fields and ``lines`` (dicts with ``food_item_id``,
        ``title``, ``producer``, ``image_uri``, ``unit_price``,
        ``quantity``); ``idempotency_key`` is optional.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Order with prefetched lines and history; ``None`` if absent."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Order]":
        """All orders, newest first, with optional ORM look-ups."""

    @abstractmethod
    def list_for_owner(self, owner_id: int) -> List[Order]:
        """The owner's orders, newest ``order_date`` first."""

    @abstractmethod
    def add_history(
        self,
        order_id: Any,
        status: str,
        old_status: Optional[str] = None,
        changed_by_id: Optional[int] = None,
        notes: str = "",
    ) -> OrderStatusHistory:
        """Append a status change to the order's audit trail."""

    @abstractmethod
    def get_by_idempotency_key(self, owner_id: int, key: str) -> Optional[Order]:
        """The owner's order created with *key*, if any."""
