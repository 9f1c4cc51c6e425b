"""Accounts URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from modules.accounts.views import ProfileView, RegisterView, UserSearchView

urlpatterns = [
    path("auth/register", RegisterView.as_view(), name="register"),
    path("auth/token", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
    path("users/me", ProfileView.as_view(), name="profile"),
    path("users/search", UserSearchView.as_view(), name="user-search"),
]
