"""Django ORM implementation of the FoodItem repository.

Follows the Null Object pattern: look-ups return ``None`` instead of
raising, the Service Layer decides how to report a missing listing.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.catalog.models import FoodItem
from modules.catalog.repositories.interfaces import IFoodItemRepository

logger = structlog.get_logger(__name__)


class FoodItemDjangoRepository(IFoodItemRepository):
    """Concrete FoodItem repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[FoodItem]:
        try:
            return (
                FoodItem.objects.alive().select_related("lister").filter(id=id).first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = FoodItem.objects.alive().select_related("lister")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset.order_by("-created_at", "-id")

    def list_by_lister(self, lister_id: int) -> models.QuerySet:
        return self.list({"lister_id": lister_id})

    @transaction.atomic
    def save(self, entity: FoodItem) -> FoodItem:
        entity.save()
        logger.info("food_item.saved", food_item_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, entity: FoodItem) -> None:
        entity.delete()
        logger.info("food_item.soft_deleted", food_item_id=str(entity.id))
