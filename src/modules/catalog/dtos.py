"""Catalog DTOs for the Service Layer.

Framework-agnostic, immutable (``frozen=True``) Pydantic v2 contracts
between the API layer (DRF serializers) and ``CatalogService``.

- ``CreateFoodItemDTO``: input for a new listing.
- ``UpdateFoodItemDTO``: partial update, only supplied fields change.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.catalog.constants import MAX_CERTIFICATIONS, UnitType


def measure_error(
    unit_type: str, quantity: Optional[int], size_measurement: Optional[str]
) -> Optional[Tuple[str, str]]:
    """Return ``(field, message)`` when the measure fields are inconsistent."""
    if unit_type == UnitType.UNIT and (quantity is None or quantity < 1):
        return "quantity", "Quantity must be at least 1 if pricing per unit."
    if unit_type == UnitType.SIZE and not (size_measurement or "").strip():
        return (
            "size_measurement",
            "Size/weight measurement is required if pricing per size.",
        )
    return None


class CreateFoodItemDTO(BaseModel):
    """Immutable DTO for listing creation.

    Validates price (>= 0), certification count and the unit/size rule.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, max_length=200)
    producer: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    description: str = ""
    image_uri: str = ""
    origin: str = ""
    certifications: List[str] = Field(default_factory=list)
    expiry_date: Optional[date] = None
    contact_info: str = ""
    contact_method: str = ""
    unit_type: UnitType = UnitType.UNIT
    quantity: Optional[int] = None
    size_measurement: str = ""
    share_location: bool = False
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None

    @field_validator("title", "producer")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field may not be blank.")
        return v.strip()

    @field_validator("certifications")
    @classmethod
    def limit_certifications(cls, v: List[str]) -> List[str]:
        if len(v) > MAX_CERTIFICATIONS:
            raise ValueError(f"At most {MAX_CERTIFICATIONS} certifications.")
        return [c.strip() for c in v if c.strip()]

    @model_validator(mode="after")
    def measure_is_consistent(self):
        error = measure_error(self.unit_type, self.quantity, self.size_measurement)
        if error:
            raise ValueError(error[1])
        return self


class UpdateFoodItemDTO(BaseModel):
    """Immutable DTO for listing updates.

    All fields are optional; the unit/size rule is checked by the service
    against the merged listing.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    producer: Optional[str] = Field(default=None, min_length=1, max_length=200)
    price: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = None
    image_uri: Optional[str] = None
    origin: Optional[str] = None
    certifications: Optional[List[str]] = None
    expiry_date: Optional[date] = None
    contact_info: Optional[str] = None
    contact_method: Optional[str] = None
    unit_type: Optional[UnitType] = None
    quantity: Optional[int] = None
    size_measurement: Optional[str] = None
    share_location: Optional[bool] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)
