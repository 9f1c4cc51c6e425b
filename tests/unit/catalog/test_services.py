"""Unit tests for CatalogService."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.catalog.dtos import CreateFoodItemDTO, UpdateFoodItemDTO
from modules.catalog.exceptions import FoodItemNotFound, InvalidListing, NotListingOwner
from modules.catalog.models import FoodItem
from modules.catalog.repositories import FoodItemDjangoRepository
from modules.catalog.services import CatalogService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CatalogService(repository=FoodItemDjangoRepository())


class TestCreate:
    def test_create_listing(self, service, other_user):
        item = service.create_listing(
            other_user,
            CreateFoodItemDTO(
                title="Goat Cheese",
                producer="Valley Dairy",
                price=Decimal("9.90"),
                quantity=3,
                share_location=True,
                latitude=Decimal("40.7128"),
                longitude=Decimal("-74.006"),
            ),
        )
        item.refresh_from_db()
        assert item.lister == other_user
        assert item.price == Decimal("9.90")
        assert item.latitude == Decimal("40.712800")

    def test_coordinates_dropped_when_not_shared(self, service, other_user):
        item = service.create_listing(
            other_user,
            CreateFoodItemDTO(
                title="Eggs",
                producer="Hill Farm",
                price=Decimal("4.25"),
                quantity=12,
                latitude=Decimal("1"),
                longitude=Decimal("1"),
            ),
        )
        assert item.latitude is None
        assert item.longitude is None


class TestQueries:
    def test_marketplace_hides_deleted_and_is_newest_first(self, service, make_listing):
        old = make_listing(title="old")
        new = make_listing(title="new")
        gone = make_listing(title="gone")
        gone.delete()

        assert list(service.list_marketplace()) == [new, old]

    def test_get_listing_missing(self, service, make_listing):
        gone = make_listing()
        gone.delete()
        for missing in (str(gone.id), "not-a-uuid"):
            with pytest.raises(FoodItemNotFound):
                service.get_listing(missing)

    def test_my_listings(self, service, make_listing, user, other_user):
        mine = make_listing(lister=user)
        make_listing(lister=other_user)
        assert list(service.list_my_listings(user)) == [mine]


class TestUpdateAndDelete:
    def test_owner_updates(self, service, make_listing, other_user):
        item = make_listing(price="1.00")
        updated = service.update_listing(
            other_user, str(item.id), UpdateFoodItemDTO(price=Decimal("2.00"))
        )
        assert updated.price == Decimal("2.00")

    def test_switch_to_size_requires_measurement(
        self, service, make_listing, other_user
    ):
        item = make_listing()
        with pytest.raises(InvalidListing) as excinfo:
            service.update_listing(
                other_user, str(item.id), UpdateFoodItemDTO(unit_type="size")
            )
        assert excinfo.value.field == "size_measurement"
        item.refresh_from_db()
        assert item.unit_type == "unit"

    def test_non_owner_cannot_update(self, service, make_listing, user):
        item = make_listing()
        with pytest.raises(NotListingOwner):
            service.update_listing(user, str(item.id), UpdateFoodItemDTO(title="Mine"))

    def test_delete_is_soft(self, service, make_listing, other_user):
        item = make_listing()
        service.delete_listing(other_user, str(item.id))
        assert FoodItem.objects.get(pk=item.pk).is_deleted

    def test_non_owner_cannot_delete(self, service, make_listing, user):
        item = make_listing()
        with pytest.raises(NotListingOwner):
            service.delete_listing(user, str(item.id))
        assert not FoodItem.objects.get(pk=item.pk).is_deleted
