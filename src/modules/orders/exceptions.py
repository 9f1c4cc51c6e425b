"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import List


class OrderNotFound(Exception):
    """The requested order does not exist (or the id is malformed)."""


class OrderAccessDenied(Exception):
    """The caller is neither the owner nor an administrative actor, or an
    owner requested a transition reserved to administrators."""


class OwnerMismatch(Exception):
    """The checkout payload names a different user than the caller."""


class EmptyCart(Exception):
    """Checkout attempted without a cart or with no lines."""


class ItemUnavailable(Exception):
    """One or more cart lines point at deleted listings."""

    def __init__(self, titles: List[str]) -> None:
        super().__init__(
            "Some items in your cart are no longer available: " + ", ".join(titles)
        )
        self.titles = titles


class InvalidTransition(Exception):
    """The status change is not in the transition table."""


class UnknownStatus(Exception):
    """The requested status is not a known order status."""


class CheckoutConflict(Exception):
    """The cart changed while the checkout was running; safe to retry."""
