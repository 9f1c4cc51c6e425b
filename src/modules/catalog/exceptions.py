"""Catalog domain exceptions.

Raised by the Service Layer; the API layer (Views) translates them
into HTTP errors.
"""

from __future__ import annotations


class FoodItemNotFound(Exception):
    """The listing does not exist, has been deleted or the id is malformed."""


class NotListingOwner(Exception):
    """The caller is not the lister of the listing."""


class InvalidListing(Exception):
    """The listing fields are inconsistent (e.g. ``unit`` without quantity).

    ``field`` names the offending attribute for field-level error messages.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
