import pytest


@pytest.fixture()
def checkout_payload():
    """Valid ``POST /api/v1/orders`` body; override top-level keys per test."""

    def _payload(**overrides):
        data = {
            "shippingDetails": {
                "fullName": "Ada Buyer",
                "address": "1 Market Street",
                "city": "Springfield",
                "state": "IL",
                "zipCode": "62701",
                "phone": "(555) 123-4567",
            },
            "paymentMethod": "creditCard",
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture()
def add_to_cart():
    def _add(client, item, quantity=1):
        response = client.post(
            "/api/v1/cart/add",
            {"itemId": str(item.id), "quantity": quantity},
            format="json",
        )
        assert response.status_code == 201, response.content
        return response

    return _add


@pytest.fixture()
def place_order(auth_client, add_to_cart, checkout_payload):
    """Checks out the buyer's cart through the API and returns the order JSON."""

    def _place(*lines, **overrides):
        for item, quantity in lines:
            add_to_cart(auth_client, item, quantity)
        response = auth_client.post(
            "/api/v1/orders", checkout_payload(**overrides), format="json"
        )
        assert response.status_code == 201, response.content
        return response.json()

    return _place
