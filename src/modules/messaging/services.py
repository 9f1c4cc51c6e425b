"""Messaging service layer.

One-to-one text messages between users, addressed by username.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Tuple

import structlog
from django.db import transaction

from modules.messaging.dtos import ConversationSummary
from modules.messaging.exceptions import MessageToSelf, RecipientNotFound

if TYPE_CHECKING:
    from modules.accounts.repositories.interfaces import IAccountRepository
    from modules.messaging.dtos import SendMessageDTO
    from modules.messaging.models import Message
    from modules.messaging.repositories.interfaces import IMessageRepository

logger = structlog.get_logger(__name__)


class MessagingService:
    def __init__(
        self,
        message_repository: IMessageRepository,
        account_repository: IAccountRepository,
    ) -> None:
        self._messages = message_repository
        self._accounts = account_repository

    @transaction.atomic
    def send(self, sender, dto: SendMessageDTO) -> Message:
        """Store a message for ``dto.recipient``.

        Raises:
            RecipientNotFound: unknown or inactive username.
            MessageToSelf: sender addressed themselves.
        """
        recipient = self._resolve(dto.recipient)
        if recipient.pk == sender.pk:
            raise MessageToSelf("You cannot send a message to yourself.")

        message = self._messages.create(sender.pk, recipient.pk, dto.content)
        logger.info(
            "messaging.message_sent",
            message_id=str(message.id),
            sender_id=sender.pk,
            recipient_id=recipient.pk,
        )
        return message

    def history(self, user, username: str) -> List[Message]:
        """Conversation with ``username``, oldest first.

        Raises:
            RecipientNotFound: unknown username.
        """
        other = self._resolve(username)
        return self._messages.between(user.pk, other.pk)

    @transaction.atomic
    def mark_read(self, user, username: str) -> int:
        """Mark everything ``username`` sent to ``user`` as read.

        Raises:
            RecipientNotFound: unknown username.
        """
        other = self._resolve(username)
        count = self._messages.mark_read(recipient_id=user.pk, sender_id=other.pk)
        if count:
            logger.info("messaging.marked_read", user_id=user.pk, count=count)
        return count

    def conversations(self, user) -> List[ConversationSummary]:
        """One entry per counterpart, most recent conversation first."""
        latest: Dict[int, Tuple[Any, Message]] = {}
        for message in self._messages.involving(user.pk):
            counterpart = (
                message.recipient if message.sender_id == user.pk else message.sender
            )
            latest.setdefault(counterpart.pk, (counterpart, message))

        unread = self._messages.unread_counts(user.pk)
        return [
            ConversationSummary(
                counterpart=counterpart,
                last_message=message,
                unread_count=unread.get(pk, 0),
            )
            for pk, (counterpart, message) in latest.items()
        ]

    def _resolve(self, username: str):
        user = self._accounts.get_by_username(username)
        if user is None:
            raise RecipientNotFound(f"User {username} not found.")
        return user
