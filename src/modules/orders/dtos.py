"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``ShippingDetailsDTO``: shipping address, format-validated at submission.
- ``CheckoutDTO``: input for checkout (the cart itself is read server-side).
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.orders.constants import (
    PHONE_DIGITS,
    ZIP_CODE_PATTERN,
    PaymentMethod,
)

_ZIP_RE = re.compile(ZIP_CODE_PATTERN)
_NON_DIGITS = re.compile(r"\D")


class ShippingDetailsDTO(BaseModel):
    """All six fields are required and non-blank.

    ``zip_code`` must be 5 digits with an optional 4-digit extension;
    ``phone`` must hold exactly 10 digits once separators are stripped
    (it is stored as those 10 digits).
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    full_name: str = Field(min_length=1, max_length=200)
    address: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(min_length=1)
    phone: str = Field(min_length=1)

    @field_validator("zip_code")
    @classmethod
    def zip_code_format(cls, v: str) -> str:
        if not _ZIP_RE.match(v):
            raise ValueError("Invalid zip code format (e.g., 12345 or 12345-6789).")
        return v

    @field_validator("phone")
    @classmethod
    def phone_has_ten_digits(cls, v: str) -> str:
        digits = _NON_DIGITS.sub("", v)
        if len(digits) != PHONE_DIGITS:
            raise ValueError("Phone number must be 10 digits.")
        return digits


class CheckoutDTO(BaseModel):
    """Immutable checkout request.

    ``client_total`` is what the client believed the total was; it is
    informational only (server prices are authoritative). ``claimed_owner_id``
    is the ``userId`` the client sent, if any; it must match ``owner_id``.
    """

    model_config = ConfigDict(frozen=True)

    owner_id: int
    shipping: ShippingDetailsDTO
    payment_method: PaymentMethod
    idempotency_key: Optional[str] = Field(default=None, min_length=1, max_length=200)
    client_total: Optional[Decimal] = None
    claimed_owner_id: Optional[str] = None
