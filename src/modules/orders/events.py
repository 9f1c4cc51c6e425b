"""Domain events for the Orders bounded context.

Event specific fields are plain JSON-friendly values so they survive the
outbox round trip unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when checkout turns a cart into an order."""

    order_number: str = ""
    owner_id: Optional[int] = None
    total_amount: str = "0.00"
    line_count: int = 0


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    """Raised when an order is cancelled."""

    order_number: str = ""
    changed_by_id: Optional[int] = None


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order moves forward in its lifecycle."""

    order_number: str = ""
    old_status: str = ""
    new_status: str = ""
    changed_by_id: Optional[int] = None
