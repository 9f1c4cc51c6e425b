"""Messaging domain exceptions."""

from __future__ import annotations


class RecipientNotFound(Exception):
    """No active user with the given username."""


class MessageToSelf(Exception):
    """Sender and recipient are the same user."""
