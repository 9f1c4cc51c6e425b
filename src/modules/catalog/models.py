"""FoodItem model: a marketplace listing.

Business rules implemented:
- Price is a fixed-point amount and never negative.
- ``unit`` listings carry an integer ``quantity`` >= 1; ``size`` listings
  carry a non-blank ``size_measurement`` (enforced at DTO / service level).
- Listings are soft-deleted: carts and order snapshots keep their
  reference, the marketplace stops showing them.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.catalog.constants import UnitType
from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)


class FoodItem(SoftDeleteModel):
    """Listing aggregate root, owned by its ``lister``."""

    title = models.CharField(max_length=200)
    producer = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    description = models.TextField(blank=True, default="")
    image_uri = models.CharField(max_length=500, blank=True, default="")
    origin = models.CharField(max_length=200, blank=True, default="")
    certifications = models.JSONField(default=list, blank=True)
    expiry_date = models.DateField(null=True, blank=True)
    contact_info = models.CharField(max_length=255, blank=True, default="")
    contact_method = models.CharField(max_length=50, blank=True, default="")
    unit_type = models.CharField(
        max_length=10,
        choices=UnitType.choices,
        default=UnitType.UNIT,
    )
    quantity = models.PositiveIntegerField(null=True, blank=True)
    size_measurement = models.CharField(max_length=100, blank=True, default="")
    share_location = models.BooleanField(default=False)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(
        max_digits=9, decimal_places=6, null=True, blank=True
    )
    lister = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="listings",
    )

    class Meta:
        db_table = "food_items"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["lister", "-created_at"], name="food_items_lister_idx"),
            models.Index(fields=["-created_at"], name="food_items_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(price__gte=0),
                name="food_items_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if not self.share_location:
            self.latitude = None
            self.longitude = None
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "food_item_created",
                food_item_id=str(self.id),
                lister_id=self.lister_id,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.title} ({self.producer})"
