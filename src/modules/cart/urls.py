"""Cart URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.cart.views import CartViewSet

urlpatterns = [
    path("cart", CartViewSet.as_view({"get": "retrieve"}), name="cart-detail"),
    path("cart/add", CartViewSet.as_view({"post": "add"}), name="cart-add"),
    path("cart/update", CartViewSet.as_view({"put": "update_line"}), name="cart-update"),
    path(
        "cart/remove/<str:item_id>",
        CartViewSet.as_view({"delete": "remove"}),
        name="cart-remove",
    ),
    path("cart/clear", CartViewSet.as_view({"delete": "clear"}), name="cart-clear"),
]
