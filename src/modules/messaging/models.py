"""Direct messages between two users.

Messages are immutable apart from the ``read`` flag, which only the
recipient flips.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel
from modules.messaging.constants import MAX_CONTENT_LENGTH


class Message(BaseModel):
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    content = models.TextField(max_length=MAX_CONTENT_LENGTH)
    read = models.BooleanField(default=False)

    class Meta:
        db_table = "messages"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["sender", "recipient", "created_at"]),
            models.Index(fields=["recipient", "read"]),
        ]
        constraints = [
            models.CheckConstraint(
                check=~models.Q(sender=models.F("recipient")),
                name="messages_not_to_self",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.sender_id} -> {self.recipient_id}"
