"""Catalog URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import SimpleRouter

from modules.catalog.views import FoodItemViewSet

router = SimpleRouter(trailing_slash=False)
router.register("listings", FoodItemViewSet, basename="listing")

urlpatterns = [
    path(
        "marketplace",
        FoodItemViewSet.as_view({"get": "list"}),
        name="marketplace",
    ),
    *router.urls,
]
