"""Messaging URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.messaging.views import MessageViewSet

urlpatterns = [
    path("messages", MessageViewSet.as_view({"post": "create"}), name="message-send"),
    path(
        "messages/conversations",
        MessageViewSet.as_view({"get": "conversations"}),
        name="message-conversations",
    ),
    path(
        "messages/with/<str:username>",
        MessageViewSet.as_view({"get": "history"}),
        name="message-history",
    ),
    path(
        "messages/with/<str:username>/read",
        MessageViewSet.as_view({"patch": "mark_read"}),
        name="message-mark-read",
    ),
]
