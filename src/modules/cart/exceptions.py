"""Cart domain exceptions.

Raised by ``CartService``; views translate them into HTTP errors.
"""

from __future__ import annotations


class CartNotFound(Exception):
    """The user has no cart yet."""


class CartLineNotFound(Exception):
    """The cart has no line for the requested listing."""


class CartItemNotFound(Exception):
    """The listing to add does not exist or has been deleted."""


class InvalidQuantity(Exception):
    """The requested quantity is not positive or exceeds the per-line cap."""
