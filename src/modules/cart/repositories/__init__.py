"""Cart repositories package."""

from modules.cart.repositories.django_repository import CartDjangoRepository
from modules.cart.repositories.interfaces import ICartRepository

__all__ = ["ICartRepository", "CartDjangoRepository"]
