"""Django ORM implementation of the Cart repository.

Merge-on-add is an ``UPDATE ... SET quantity = quantity + n`` issued
through ``F()`` expressions; the unique (cart, listing) constraint turns
a concurrent first insert into an ``IntegrityError`` that the service
resolves by incrementing instead.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from modules.cart.constants import MAX_LINE_QUANTITY
from modules.cart.models import Cart, CartLine
from modules.cart.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Cart]:
        try:
            return Cart.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Cart.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def get_by_owner(self, owner_id: int) -> Optional[Cart]:
        return Cart.objects.filter(owner_id=owner_id).first()

    def get_or_create(self, owner_id: int) -> Cart:
        # get_or_create re-reads on IntegrityError, so two first requests
        # from the same user still end up with a single cart.
        cart, created = Cart.objects.get_or_create(owner_id=owner_id)
        if created:
            logger.info("cart.created", cart_id=str(cart.id), owner_id=owner_id)
        return cart

    def get_for_update(self, owner_id: int) -> Optional[Cart]:
        return Cart.objects.select_for_update().filter(owner_id=owner_id).first()

    def lines(self, cart_id: UUID) -> List[CartLine]:
        return list(
            CartLine.objects.filter(cart_id=cart_id)
            .select_related("food_item")
            .order_by("created_at", "id")
        )

    # ------------------------------------------------------------------
    # Line mutations (single statements)
    # ------------------------------------------------------------------

    def increment_line(self, cart_id: UUID, item_id: UUID, quantity: int) -> bool:
        updated = CartLine.objects.filter(
            cart_id=cart_id,
            food_item_id=item_id,
            quantity__lte=MAX_LINE_QUANTITY - quantity,
        ).update(
            quantity=F("quantity") + quantity, updated_at=timezone.now()
        )
        return updated == 1

    def insert_line(self, cart_id: UUID, item_id: UUID, quantity: int) -> CartLine:
        # Savepoint so a lost insert race leaves the outer transaction usable
        with transaction.atomic():
            return CartLine.objects.create(
                cart_id=cart_id, food_item_id=item_id, quantity=quantity
            )

    def set_line_quantity(self, cart_id: UUID, item_id: UUID, quantity: int) -> bool:
        updated = CartLine.objects.filter(cart_id=cart_id, food_item_id=item_id).update(
            quantity=quantity, updated_at=timezone.now()
        )
        return updated == 1

    def delete_line(self, cart_id: UUID, item_id: UUID) -> int:
        deleted, _ = CartLine.objects.filter(
            cart_id=cart_id, food_item_id=item_id
        ).delete()
        return deleted

    def clear_lines(self, cart_id: UUID) -> int:
        deleted, _ = CartLine.objects.filter(cart_id=cart_id).delete()
        return deleted

    # ------------------------------------------------------------------
    # Versioning
    # ------------------------------------------------------------------

    def touch(self, cart_id: UUID) -> None:
        Cart.objects.filter(id=cart_id).update(
            version=F("version") + 1, updated_at=timezone.now()
        )

    @transaction.atomic
    def clear_if_version(self, cart_id: UUID, expected_version: int) -> bool:
        swapped = Cart.objects.filter(id=cart_id, version=expected_version).update(
            version=F("version") + 1, updated_at=timezone.now()
        )
        if swapped != 1:
            logger.warning(
                "cart.version_conflict",
                cart_id=str(cart_id),
                expected_version=expected_version,
            )
            return False
        removed = self.clear_lines(cart_id)
        logger.info("cart.cleared_by_version", cart_id=str(cart_id), lines=removed)
        return True

    # ------------------------------------------------------------------
    # IRepository contract
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Cart) -> Cart:
        entity.save()
        return entity
