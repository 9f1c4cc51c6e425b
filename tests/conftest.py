from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from modules.catalog.models import FoodItem

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def user():
    return User.objects.create_user(
        username="buyer", email="buyer@example.com", password="testpass123"
    )


@pytest.fixture()
def other_user():
    return User.objects.create_user(
        username="lister", email="lister@example.com", password="testpass123"
    )


@pytest.fixture()
def admin_user():
    return User.objects.create_user(
        username="admin",
        email="admin@example.com",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture()
def bearer():
    """Builds an ``Authorization`` header value carrying a fresh access token."""

    def _bearer(user) -> str:
        return f"Bearer {AccessToken.for_user(user)}"

    return _bearer


@pytest.fixture()
def auth_client(user):
    """APIClient with a force-authenticated buyer."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture()
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_listing(other_user):
    """Factory for live listings owned by ``other_user`` unless told otherwise."""

    def _make(title="Organic Honey", price="5.00", lister=None, **extra):
        defaults = {
            "producer": "Hill Apiary",
            "unit_type": "unit",
            "quantity": 10,
        }
        defaults.update(extra)
        return FoodItem.objects.create(
            title=title,
            price=Decimal(price),
            lister=lister or other_user,
            **defaults,
        )

    return _make
