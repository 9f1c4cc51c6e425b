from __future__ import annotations

import pytest

from modules.cart.dtos import AddCartLineDTO
from modules.cart.repositories import CartDjangoRepository
from modules.cart.services import CartService
from modules.catalog.repositories import FoodItemDjangoRepository
from modules.orders.constants import PaymentMethod
from modules.orders.dtos import CheckoutDTO, ShippingDetailsDTO
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService


@pytest.fixture()
def cart_service():
    return CartService(
        cart_repository=CartDjangoRepository(),
        food_item_repository=FoodItemDjangoRepository(),
    )


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        cart_repository=CartDjangoRepository(),
    )


@pytest.fixture()
def shipping():
    return ShippingDetailsDTO(
        full_name="Ada Buyer",
        address="1 Market Street",
        city="Springfield",
        state="IL",
        zip_code="62701",
        phone="555-123-4567",
    )


@pytest.fixture()
def checkout_dto(user, shipping):
    def _make(**overrides):
        data = {
            "owner_id": user.pk,
            "shipping": shipping,
            "payment_method": PaymentMethod.CREDIT_CARD,
        }
        data.update(overrides)
        return CheckoutDTO(**data)

    return _make


@pytest.fixture()
def fill_cart(cart_service, user):
    def _fill(*lines, owner=None):
        owner = owner or user
        for item, quantity in lines:
            cart_service.add_line(
                owner.pk, AddCartLineDTO(item_id=item.id, quantity=quantity)
            )

    return _fill


@pytest.fixture()
def placed_order(make_listing, fill_cart, order_service, checkout_dto):
    """A pending order owned by ``user``."""
    fill_cart((make_listing(price="4.00"), 2))
    order, _ = order_service.checkout(checkout_dto())
    return order
