"""Cart DRF serializers (camelCase wire format)."""

from __future__ import annotations

from rest_framework import serializers

from modules.cart.constants import MAX_LINE_QUANTITY
from modules.core.money import AMOUNT_MAX_DIGITS

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AddToCartSerializer(serializers.Serializer):
    itemId = serializers.UUIDField(error_messages={"invalid": "Invalid item ID."})
    quantity = serializers.IntegerField(
        min_value=1, max_value=MAX_LINE_QUANTITY, default=1
    )


class UpdateCartLineSerializer(serializers.Serializer):
    """``quantity <= 0`` is rejected by the service (a domain error)."""

    itemId = serializers.UUIDField(error_messages={"invalid": "Invalid item ID."})
    quantity = serializers.IntegerField(max_value=MAX_LINE_QUANTITY)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CartLineSerializer(serializers.Serializer):
    itemId = serializers.UUIDField(source="item_id")
    quantity = serializers.IntegerField()
    available = serializers.BooleanField()
    title = serializers.CharField()
    producer = serializers.CharField()
    imageUri = serializers.CharField(source="image_uri")
    unitPrice = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, allow_null=True
    )
    subtotal = serializers.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS, decimal_places=2, allow_null=True
    )


class CartSerializer(serializers.Serializer):
    """Renders a ``CartView`` (stored cart joined with the catalog)."""

    id = serializers.UUIDField()
    userId = serializers.IntegerField(source="owner_id")
    items = CartLineSerializer(source="lines", many=True)
    itemCount = serializers.IntegerField(source="item_count")
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=AMOUNT_MAX_DIGITS, decimal_places=2
    )
    updatedAt = serializers.DateTimeField(source="updated_at")
