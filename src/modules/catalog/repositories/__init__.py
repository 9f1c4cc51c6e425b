"""Catalog repositories package."""

from modules.catalog.repositories.django_repository import FoodItemDjangoRepository
from modules.catalog.repositories.interfaces import IFoodItemRepository

__all__ = ["IFoodItemRepository", "FoodItemDjangoRepository"]
