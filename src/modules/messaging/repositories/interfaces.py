"""Message repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.messaging.models import Message


class IMessageRepository(IRepository["Message"]):
    @abstractmethod
    def create(self, sender_id: int, recipient_id: int, content: str) -> Message:
        ...

    @abstractmethod
    def between(self, user_id: int, other_id: int) -> List[Message]:
        """Messages exchanged by two users, oldest first."""

    @abstractmethod
    def mark_read(self, recipient_id: int, sender_id: int) -> int:
        """Flag unread messages from ``sender_id`` as read; returns the count."""

    @abstractmethod
    def involving(self, user_id: int) -> List[Message]:
        """Every message sent or received by the user, newest first."""

    @abstractmethod
    def unread_counts(self, recipient_id: int) -> Dict[int, int]:
        """Unread messages per sender id."""
