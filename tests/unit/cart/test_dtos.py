from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.cart.dtos import AddCartLineDTO, UpdateCartLineDTO

pytestmark = pytest.mark.unit


class TestAddCartLineDTO:
    def test_default_quantity_is_one(self):
        assert AddCartLineDTO(item_id=uuid4()).quantity == 1

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_rejected(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be at least 1"):
            AddCartLineDTO(item_id=uuid4(), quantity=quantity)

    def test_quantity_capped(self):
        assert AddCartLineDTO(item_id=uuid4(), quantity=9999).quantity == 9999
        with pytest.raises(ValidationError):
            AddCartLineDTO(item_id=uuid4(), quantity=10_000)

    def test_item_id_must_be_uuid(self):
        with pytest.raises(ValidationError):
            AddCartLineDTO(item_id="nope")


class TestUpdateCartLineDTO:
    def test_non_positive_left_to_service(self):
        assert UpdateCartLineDTO(item_id=uuid4(), quantity=0).quantity == 0

    def test_quantity_capped(self):
        with pytest.raises(ValidationError):
            UpdateCartLineDTO(item_id=uuid4(), quantity=10**20)
