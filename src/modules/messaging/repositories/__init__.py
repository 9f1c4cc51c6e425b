"""Messaging repositories package."""

from modules.messaging.repositories.django_repository import MessageDjangoRepository
from modules.messaging.repositories.interfaces import IMessageRepository

__all__ = ["IMessageRepository", "MessageDjangoRepository"]
