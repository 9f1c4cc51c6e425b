"""Account domain exceptions."""

from __future__ import annotations


class UserAlreadyExists(Exception):
    """The username or email is already registered."""
