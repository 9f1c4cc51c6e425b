"""Cart API views.

All routes act on the caller's own cart; the owner always comes from
the verified token, never from the request body.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.cart.dtos import AddCartLineDTO, UpdateCartLineDTO
from modules.cart.exceptions import (
    CartItemNotFound,
    CartLineNotFound,
    CartNotFound,
    InvalidQuantity,
)
from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.cart.serializers import (
    AddToCartSerializer,
    CartSerializer,
    UpdateCartLineSerializer,
)
from modules.cart.services import CartService
from modules.catalog.repositories.django_repository import FoodItemDjangoRepository


class CartViewSet(ViewSet):
    """Server-authoritative cart of the authenticated user."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CartService(
            cart_repository=CartDjangoRepository(),
            food_item_repository=FoodItemDjangoRepository(),
        )

    def retrieve(self, request: Request) -> Response:
        """GET /api/v1/cart"""
        cart = self._service.get_cart(request.user.pk)
        return Response(CartSerializer(cart).data)

    def add(self, request: Request) -> Response:
        """POST /api/v1/cart/add"""
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = AddCartLineDTO(
            item_id=serializer.validated_data["itemId"],
            quantity=serializer.validated_data["quantity"],
        )
        try:
            cart = self._service.add_line(request.user.pk, dto)
        except CartItemNotFound as exc:
            raise NotFound("Food item not found.", code="item_not_found") from exc
        except InvalidQuantity as exc:
            raise ValidationError({"quantity": [str(exc)]}) from exc
        return Response(CartSerializer(cart).data, status=status.HTTP_201_CREATED)

    def update_line(self, request: Request) -> Response:
        """PUT /api/v1/cart/update"""
        serializer = UpdateCartLineSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateCartLineDTO(
            item_id=serializer.validated_data["itemId"],
            quantity=serializer.validated_data["quantity"],
        )
        try:
            cart = self._service.update_line(request.user.pk, dto)
        except InvalidQuantity as exc:
            raise ValidationError({"quantity": [str(exc)]}) from exc
        except CartNotFound as exc:
            raise NotFound("Cart not found.", code="cart_not_found") from exc
        except CartLineNotFound as exc:
            raise NotFound("Item not found in cart.", code="line_not_found") from exc
        return Response(CartSerializer(cart).data)

    def remove(self, request: Request, item_id: str) -> Response:
        """DELETE /api/v1/cart/remove/{item_id}"""
        try:
            cart = self._service.remove_line(request.user.pk, item_id)
        except CartNotFound as exc:
            raise NotFound("Cart not found.", code="cart_not_found") from exc
        return Response(CartSerializer(cart).data)

    def clear(self, request: Request) -> Response:
        """DELETE /api/v1/cart/clear"""
        try:
            self._service.clear(request.user.pk)
        except CartNotFound as exc:
            raise NotFound("Cart not found.", code="cart_not_found") from exc
        return Response({"message": "Cart cleared successfully"})
