"""Order API views.

Exposes ``OrderService`` over HTTP. Domain exceptions are translated
into DRF exceptions carrying a stable ``code``; the view never swallows
generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.core.exceptions import BadRequest, Conflict, validation_error_from_pydantic
from modules.core.permissions import IsAdminActor
from modules.orders.dtos import CheckoutDTO, ShippingDetailsDTO
from modules.orders.exceptions import (
    CheckoutConflict,
    EmptyCart,
    InvalidTransition,
    ItemUnavailable,
    OrderAccessDenied,
    OrderNotFound,
    OwnerMismatch,
    UnknownStatus,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CheckoutSerializer,
    OrderListSerializer,
    OrderSerializer,
    StatusChangeSerializer,
)
from modules.orders.services import OrderService

CHECKOUT_WIRE_NAMES = {
    "shipping": "shippingDetails",
    "full_name": "fullName",
    "zip_code": "zipCode",
    "payment_method": "paymentMethod",
    "idempotency_key": "Idempotency-Key",
}


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP). Does **not**
    extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.
    """

    queryset = Order.objects.none()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["order_date", "total_amount", "status"]
    ordering = ["-order_date", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            cart_repository=CartDjangoRepository(),
        )

    def get_permissions(self):
        if self.action == "list":
            return [IsAdminActor()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Checkout is the only throttled action."""
        self.throttle_scope = "checkout" if self.action == "create" else None
        return super().get_throttles()

    def get_queryset(self):
        return self._service.list_orders()

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders

        Supports idempotency via the ``Idempotency-Key`` header.
        Returns 200 if the key was already used, 201 for new orders.
        """
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        shipping = data["shippingDetails"]

        try:
            dto = CheckoutDTO(
                owner_id=request.user.pk,
                shipping=ShippingDetailsDTO(
                    full_name=shipping["fullName"],
                    address=shipping["address"],
                    city=shipping["city"],
                    state=shipping["state"],
                    zip_code=shipping["zipCode"],
                    phone=shipping["phone"],
                ),
                payment_method=data["paymentMethod"],
                idempotency_key=request.headers.get("Idempotency-Key"),
                client_total=data.get("totalAmount"),
                claimed_owner_id=data.get("userId"),
            )
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc, CHECKOUT_WIRE_NAMES) from exc

        try:
            order, created = self._service.checkout(dto)
        except OwnerMismatch as exc:
            raise PermissionDenied(str(exc), code="owner_mismatch") from exc
        except EmptyCart as exc:
            raise BadRequest(str(exc), code="empty_cart") from exc
        except ItemUnavailable as exc:
            raise BadRequest(str(exc), code="item_unavailable") from exc
        except CheckoutConflict as exc:
            raise Conflict(str(exc), code="checkout_conflict") from exc

        return Response(
            OrderSerializer(order).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders (administrators)

        Filtering (status, owner, date range, total range) is handled by
        ``OrderFilter``. Results are paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=False, methods=["get"], url_path="user")
    def user(self, request: Request) -> Response:
        """GET /api/v1/orders/user"""
        orders = self._service.list_user_orders(request.user.pk)
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}"""
        try:
            order = self._service.get_order(pk, request.user)
        except OrderNotFound as exc:
            raise NotFound("Order not found.", code="order_not_found") from exc
        except OrderAccessDenied as exc:
            raise PermissionDenied(str(exc)) from exc
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status"""
        serializer = StatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.change_status(
                order_id=pk,
                actor=request.user,
                new_status=serializer.validated_data["status"],
                notes=serializer.validated_data["notes"],
            )
        except UnknownStatus as exc:
            raise ValidationError({"status": [str(exc)]}) from exc
        except OrderNotFound as exc:
            raise NotFound("Order not found.", code="order_not_found") from exc
        except OrderAccessDenied as exc:
            raise PermissionDenied(str(exc)) from exc
        except InvalidTransition as exc:
            raise Conflict(str(exc), code="invalid_transition") from exc

        return Response(OrderSerializer(order).data)
