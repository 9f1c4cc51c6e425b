"""Catalog service layer (Use Cases).

Listings are public to read and owned by their lister for writes.
Deletion is soft, so cart lines and order snapshots that reference a
listing stay readable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.catalog.dtos import measure_error
from modules.catalog.exceptions import FoodItemNotFound, InvalidListing, NotListingOwner
from modules.catalog.models import FoodItem

if TYPE_CHECKING:
    from django.db import models

    from modules.catalog.dtos import CreateFoodItemDTO, UpdateFoodItemDTO
    from modules.catalog.repositories.interfaces import IFoodItemRepository

logger = structlog.get_logger(__name__)


class CatalogService:
    """Application service for listing use-cases.

    Receives an ``IFoodItemRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IFoodItemRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_marketplace(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet:
        """Live listings, newest first."""
        return self._repo.list(filters)

    def get_listing(self, id: str) -> FoodItem:
        """Retrieve a live listing.

        Raises:
            FoodItemNotFound: absent, deleted or malformed id.
        """
        item = self._repo.get_by_id(id)
        if not item:
            raise FoodItemNotFound(f"Food item {id} not found.")
        return item

    def list_my_listings(self, lister) -> models.QuerySet:
        return self._repo.list_by_lister(lister.pk)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_listing(self, lister, dto: CreateFoodItemDTO) -> FoodItem:
        item = FoodItem(lister=lister, **dto.model_dump())
        item = self._repo.save(item)
        logger.info("catalog.listing_created", food_item_id=str(item.id))
        return item

    @transaction.atomic
    def update_listing(self, lister, id: str, dto: UpdateFoodItemDTO) -> FoodItem:
        """Apply a partial update to the caller's listing.

        Raises:
            FoodItemNotFound: listing does not exist.
            NotListingOwner: caller is not the lister.
            InvalidListing: merged unit/size fields are inconsistent.
        """
        item = self._get_owned(lister, id)
        log = logger.bind(food_item_id=str(item.id))

        for field, value in dto.changes().items():
            setattr(item, field, value)

        error = measure_error(item.unit_type, item.quantity, item.size_measurement)
        if error:
            log.warning("catalog.invalid_listing", field=error[0])
            raise InvalidListing(*error)

        item = self._repo.save(item)
        log.info("catalog.listing_updated")
        return item

    @transaction.atomic
    def delete_listing(self, lister, id: str) -> None:
        """Soft-delete the caller's listing.

        Raises:
            FoodItemNotFound: listing does not exist.
            NotListingOwner: caller is not the lister.
        """
        item = self._get_owned(lister, id)
        self._repo.delete(item)
        logger.info("catalog.listing_deleted", food_item_id=str(item.id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, lister, id: str) -> FoodItem:
        item = self.get_listing(id)
        if item.lister_id != lister.pk:
            logger.warning(
                "catalog.not_owner", food_item_id=str(item.id), user_id=lister.pk
            )
            raise NotListingOwner(f"Food item {id} belongs to another user.")
        return item
