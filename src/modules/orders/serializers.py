"""Order DRF serializers for API input/output.

The wire format is camelCase, matching the mobile client
(``shippingDetails.zipCode``, ``paymentMethod``, ``totalAmount`` ...).
Business logic lives in the Service Layer, which receives Pydantic DTOs
from ``dtos.py``.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from rest_framework import serializers

from modules.core.money import AMOUNT_MAX_DIGITS
from modules.orders.constants import (
    PHONE_DIGITS,
    ZIP_CODE_PATTERN,
    OrderStatus,
    PaymentMethod,
)
from modules.orders.models import Order, OrderLine, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ShippingDetailsSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    zipCode = serializers.RegexField(
        ZIP_CODE_PATTERN,
        error_messages={
            "invalid": "Invalid zip code format (e.g., 12345 or 12345-6789)."
        },
    )
    phone = serializers.CharField(max_length=20)

    def validate_phone(self, value: str) -> str:
        if len(re.sub(r"\D", "", value)) != PHONE_DIGITS:
            raise serializers.ValidationError("Phone number must be 10 digits.")
        return value


class CheckoutSerializer(serializers.Serializer):
    """Validates the checkout payload.

    ``items`` and ``orderDate`` may be sent by older clients and are
    ignored: the server cart and server prices are authoritative.
    ``totalAmount`` is only compared against the computed total.
    """

    shippingDetails = ShippingDetailsSerializer()
    paymentMethod = serializers.ChoiceField(choices=PaymentMethod.choices)
    totalAmount = serializers.CharField(required=False, allow_null=True)
    status = serializers.CharField(required=False)
    userId = serializers.CharField(required=False)

    def validate_totalAmount(self, value):
        if value in (None, ""):
            return None
        try:
            return Decimal(value)
        except InvalidOperation as exc:
            raise serializers.ValidationError("A valid number is required.") from exc

    def validate_status(self, value: str) -> str:
        if value != OrderStatus.PENDING:
            raise serializers.ValidationError("New orders are always 'pending'.")
        return value


class StatusChangeSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderLineSerializer(serializers.ModelSerializer):
    """Priced line snapshot."""

    itemId = serializers.UUIDField(source="food_item_id", read_only=True)
    imageUri = serializers.CharField(source="image_uri", read_only=True)
    unitPrice = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderLine
        fields = [
            "itemId",
            "title",
            "producer",
            "imageUri",
            "unitPrice",
            "quantity",
            "subtotal",
        ]
        read_only_fields = fields


class ShippingDetailsOutputSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="full_name", read_only=True)
    zipCode = serializers.CharField(source="zip_code", read_only=True)

    class Meta:
        model = Order
        fields = ["fullName", "address", "city", "state", "zipCode", "phone"]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read serializer for order status history records."""

    oldStatus = serializers.CharField(source="old_status", read_only=True)
    newStatus = serializers.CharField(source="new_status", read_only=True)
    changedBy = serializers.IntegerField(source="changed_by_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = OrderStatusHistory
        fields = ["oldStatus", "newStatus", "changedBy", "notes", "createdAt"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with lines, shipping and history."""

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    userId = serializers.IntegerField(source="owner_id", read_only=True)
    items = OrderLineSerializer(source="lines", many=True, read_only=True)
    shippingDetails = ShippingDetailsOutputSerializer(source="*", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount",
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=2,
        read_only=True,
    )
    orderDate = serializers.DateTimeField(source="order_date", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    statusHistory = StatusHistorySerializer(
        source="status_history", many=True, read_only=True
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "userId",
            "items",
            "shippingDetails",
            "paymentMethod",
            "totalAmount",
            "status",
            "orderDate",
            "updatedAt",
            "statusHistory",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the administrative list (no nested relations)."""

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    userId = serializers.IntegerField(source="owner_id", read_only=True)
    username = serializers.CharField(source="owner.username", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount",
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=2,
        read_only=True,
    )
    orderDate = serializers.DateTimeField(source="order_date", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "userId",
            "username",
            "paymentMethod",
            "totalAmount",
            "status",
            "orderDate",
        ]
        read_only_fields = fields
