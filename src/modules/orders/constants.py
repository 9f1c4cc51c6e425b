"""Order domain constants.

Status choices and the transition table of the order state machine.
Cancellation is only possible while an order is still ``pending``.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class PaymentMethod(models.TextChoices):
    CREDIT_CARD = "creditCard", "Credit card"
    PAYPAL = "paypal", "PayPal"
    CASH_ON_DELIVERY = "cashOnDelivery", "Cash on delivery"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

# The only target an owner (non-admin) may request
OWNER_ALLOWED_TARGETS: set[str] = {OrderStatus.CANCELLED}

ORDER_NUMBER_MAX_RETRIES = 5

ZIP_CODE_PATTERN = r"^\d{5}(-\d{4})?$"
PHONE_DIGITS = 10
