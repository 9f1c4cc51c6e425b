"""Integration tests for the marketplace and listing endpoints.

Covers:
- The marketplace feed is public and hides deleted listings.
- Members create listings (201) and only the lister may edit or delete.
- The unit/size pricing rule is enforced on create and on merged updates.
- Locations travel as GeoJSON points and only when shared.
"""

from __future__ import annotations

import uuid

import pytest

from modules.catalog.models import FoodItem

pytestmark = pytest.mark.integration


def _error_code(response) -> str:
    return response.json()["errors"][0]["code"]


@pytest.fixture()
def listing_payload():
    def _payload(**overrides):
        data = {
            "title": "Wildflower Honey",
            "producer": "Hill Apiary",
            "price": "12.50",
            "description": "Raw, unfiltered.",
            "certifications": ["organic"],
            "expiryDate": "2027-01-31",
            "contactMethod": "message",
            "unitType": "unit",
            "quantity": 6,
        }
        data.update(overrides)
        return data

    return _payload


class TestMarketplace:
    def test_public_feed(self, api_client, make_listing):
        make_listing("Organic Honey")
        response = api_client.get("/api/v1/marketplace")
        assert response.status_code == 200
        item = response.data["results"][0]
        assert item["title"] == "Organic Honey"
        assert item["price"] == "5.00"
        assert item["listerUsername"] == "lister"

    def test_deleted_listings_hidden(self, api_client, make_listing):
        make_listing("Gone").delete()
        make_listing("Here")
        response = api_client.get("/api/v1/marketplace")
        assert [i["title"] for i in response.data["results"]] == ["Here"]

    def test_retrieve_is_public(self, api_client, make_listing):
        item = make_listing()
        response = api_client.get(f"/api/v1/listings/{item.id}")
        assert response.status_code == 200
        assert response.json()["id"] == str(item.id)

    def test_retrieve_deleted_is_404(self, api_client, make_listing):
        item = make_listing()
        item.delete()
        response = api_client.get(f"/api/v1/listings/{item.id}")
        assert response.status_code == 404
        assert _error_code(response) == "listing_not_found"


class TestCreate:
    def test_create(self, auth_client, listing_payload, user):
        response = auth_client.post(
            "/api/v1/listings", listing_payload(), format="json"
        )
        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == user.pk
        assert data["price"] == "12.50"
        assert data["expiryDate"] == "2027-01-31"
        assert data["location"] is None
        assert FoodItem.objects.get(pk=data["id"]).lister == user

    def test_requires_authentication(self, api_client, listing_payload):
        response = api_client.post("/api/v1/listings", listing_payload(), format="json")
        assert response.status_code == 401

    def test_unit_pricing_requires_quantity(self, auth_client, listing_payload):
        response = auth_client.post(
            "/api/v1/listings", listing_payload(quantity=None), format="json"
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "quantity"

    def test_size_pricing_requires_measurement(self, auth_client, listing_payload):
        payload = listing_payload(unitType="size", quantity=None)
        response = auth_client.post("/api/v1/listings", payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "sizeMeasurement"

    def test_size_pricing(self, auth_client, listing_payload):
        payload = listing_payload(unitType="size", quantity=None, sizeMeasurement="1kg")
        response = auth_client.post("/api/v1/listings", payload, format="json")
        assert response.status_code == 201
        assert response.json()["sizeMeasurement"] == "1kg"

    @pytest.mark.parametrize(
        "overrides",
        [{"price": "-1.00"}, {"title": ""}, {"producer": "   "}, {"price": "abc"}],
    )
    def test_invalid_fields(self, auth_client, listing_payload, overrides):
        response = auth_client.post(
            "/api/v1/listings", listing_payload(**overrides), format="json"
        )
        assert response.status_code == 400

    def test_shared_location_is_geojson(self, auth_client, listing_payload):
        payload = listing_payload(
            shareLocation=True,
            location={"type": "Point", "coordinates": [-122.4194, 37.7749]},
        )
        response = auth_client.post("/api/v1/listings", payload, format="json")
        assert response.status_code == 201
        assert response.json()["location"] == {
            "type": "Point",
            "coordinates": [-122.4194, 37.7749],
        }

    def test_unshared_location_is_hidden(self, auth_client, listing_payload):
        payload = listing_payload(
            location={"type": "Point", "coordinates": [-122.4194, 37.7749]},
        )
        response = auth_client.post("/api/v1/listings", payload, format="json")
        assert response.json()["location"] is None

    def test_out_of_range_coordinates(self, auth_client, listing_payload):
        payload = listing_payload(
            shareLocation=True,
            location={"type": "Point", "coordinates": [200, 10]},
        )
        response = auth_client.post("/api/v1/listings", payload, format="json")
        assert response.status_code == 400


class TestUpdateAndDelete:
    def test_owner_updates(self, other_client, make_listing):
        item = make_listing()
        response = other_client.patch(
            f"/api/v1/listings/{item.id}", {"price": "6.25"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["price"] == "6.25"
        assert response.json()["title"] == "Organic Honey"

    def test_non_owner_cannot_update(self, auth_client, make_listing):
        item = make_listing()
        response = auth_client.patch(
            f"/api/v1/listings/{item.id}", {"price": "0.01"}, format="json"
        )
        assert response.status_code == 403
        assert _error_code(response) == "not_listing_owner"
        item.refresh_from_db()
        assert str(item.price) == "5.00"

    def test_merged_update_checks_measure_rule(self, other_client, make_listing):
        item = make_listing()
        response = other_client.patch(
            f"/api/v1/listings/{item.id}", {"unitType": "size"}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "sizeMeasurement"

    def test_update_unknown(self, other_client):
        response = other_client.patch(
            f"/api/v1/listings/{uuid.uuid4()}", {"price": "1.00"}, format="json"
        )
        assert response.status_code == 404

    def test_owner_deletes(self, other_client, make_listing):
        item = make_listing()
        response = other_client.delete(f"/api/v1/listings/{item.id}")
        assert response.status_code == 204
        item.refresh_from_db()
        assert item.is_deleted

    def test_non_owner_cannot_delete(self, auth_client, make_listing):
        item = make_listing()
        response = auth_client.delete(f"/api/v1/listings/{item.id}")
        assert response.status_code == 403
        item.refresh_from_db()
        assert not item.is_deleted

    def test_delete_twice_is_404(self, other_client, make_listing):
        item = make_listing()
        other_client.delete(f"/api/v1/listings/{item.id}")
        response = other_client.delete(f"/api/v1/listings/{item.id}")
        assert response.status_code == 404


class TestMine:
    def test_only_callers_live_listings(self, other_client, make_listing, user):
        make_listing("Mine A")
        make_listing("Mine B")
        make_listing("Not Mine", lister=user)
        make_listing("Deleted").delete()

        response = other_client.get("/api/v1/listings/mine")

        assert response.status_code == 200
        assert [i["title"] for i in response.json()] == ["Mine B", "Mine A"]

    def test_requires_authentication(self, api_client):
        assert api_client.get("/api/v1/listings/mine").status_code == 401
