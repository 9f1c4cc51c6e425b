"""Messaging constants."""

MAX_CONTENT_LENGTH = 2000
