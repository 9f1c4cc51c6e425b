"""FoodItem repository interface.

Extends ``IRepository[FoodItem]`` with live-only resolution (deleted
listings read as absent) and per-lister listing.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.catalog.models import FoodItem


class IFoodItemRepository(IRepository["FoodItem"]):
    """Repository contract for the FoodItem aggregate."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[FoodItem]:
        """Retrieve a **live** listing; ``None`` if absent, deleted or malformed."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[FoodItem]":
        """Live listings, newest first, with optional ORM look-ups."""

    @abstractmethod
    def list_by_lister(self, lister_id: int) -> "models.QuerySet[FoodItem]":
        """Live listings owned by *lister_id*, newest first."""

    @abstractmethod
    def delete(self, entity: FoodItem) -> None:
        """Soft-delete a listing."""
