"""Unit tests for catalog DTOs and the unit/size rule."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.catalog.constants import MAX_CERTIFICATIONS
from modules.catalog.dtos import CreateFoodItemDTO, UpdateFoodItemDTO, measure_error

pytestmark = pytest.mark.unit


def _create(**overrides):
    data = {"title": "Honey", "producer": "Hill Apiary", "price": Decimal("5.00")}
    data.update(overrides)
    return CreateFoodItemDTO(**data)


class TestMeasureRule:
    def test_unit_needs_quantity(self):
        assert measure_error("unit", None, "")[0] == "quantity"
        assert measure_error("unit", 0, "")[0] == "quantity"
        assert measure_error("unit", 1, "") is None

    def test_size_needs_measurement(self):
        assert measure_error("size", None, "  ")[0] == "size_measurement"
        assert measure_error("size", None, "500g") is None


class TestCreateFoodItemDTO:
    def test_unit_listing(self):
        dto = _create(unit_type="unit", quantity=4)
        assert dto.quantity == 4

    def test_size_listing(self):
        dto = _create(unit_type="size", size_measurement="1kg")
        assert dto.size_measurement == "1kg"

    def test_unit_without_quantity(self):
        with pytest.raises(ValidationError, match="Quantity must be at least 1"):
            _create(unit_type="unit")

    def test_size_without_measurement(self):
        with pytest.raises(ValidationError, match="measurement is required"):
            _create(unit_type="size")

    def test_negative_price(self):
        with pytest.raises(ValidationError):
            _create(price=Decimal("-0.01"), quantity=1)

    def test_free_listing_allowed(self):
        assert _create(price=Decimal("0"), quantity=1).price == Decimal("0")

    def test_blank_title(self):
        with pytest.raises(ValidationError, match="may not be blank"):
            _create(title="   ", quantity=1)

    def test_certifications_trimmed_and_capped(self):
        dto = _create(quantity=1, certifications=[" organic ", "", "fair trade"])
        assert dto.certifications == ["organic", "fair trade"]
        with pytest.raises(ValidationError):
            _create(quantity=1, certifications=["c"] * (MAX_CERTIFICATIONS + 1))


class TestUpdateFoodItemDTO:
    def test_changes_only_include_sent_fields(self):
        dto = UpdateFoodItemDTO(price=Decimal("1.00"), description="")
        assert dto.changes() == {"price": Decimal("1.00"), "description": ""}
