"""Django ORM implementation of ``IMessageRepository``."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.db import models

from modules.messaging.models import Message
from modules.messaging.repositories.interfaces import IMessageRepository


class MessageDjangoRepository(IMessageRepository):
    def get_by_id(self, id: str) -> Optional[Message]:
        try:
            return Message.objects.get(pk=id)
        except (Message.DoesNotExist, ValueError, TypeError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        qs = Message.objects.select_related("sender", "recipient")
        if filters:
            qs = qs.filter(**filters)
        return qs

    def save(self, entity: Message) -> Message:
        entity.save()
        return entity

    def create(self, sender_id: int, recipient_id: int, content: str) -> Message:
        message = Message.objects.create(
            sender_id=sender_id, recipient_id=recipient_id, content=content
        )
        return Message.objects.select_related("sender", "recipient").get(pk=message.pk)

    def between(self, user_id: int, other_id: int) -> List[Message]:
        pair = models.Q(sender_id=user_id, recipient_id=other_id) | models.Q(
            sender_id=other_id, recipient_id=user_id
        )
        return list(
            Message.objects.filter(pair)
            .select_related("sender", "recipient")
            .order_by("created_at", "id")
        )

    def mark_read(self, recipient_id: int, sender_id: int) -> int:
        return Message.objects.filter(
            recipient_id=recipient_id, sender_id=sender_id, read=False
        ).update(read=True)

    def involving(self, user_id: int) -> List[Message]:
        return list(
            Message.objects.filter(
                models.Q(sender_id=user_id) | models.Q(recipient_id=user_id)
            )
            .select_related("sender", "recipient")
            .order_by("-created_at", "-id")
        )

    def unread_counts(self, recipient_id: int) -> Dict[int, int]:
        rows = (
            Message.objects.filter(recipient_id=recipient_id, read=False)
            .values("sender_id")
            .annotate(total=models.Count("id"))
        )
        return {row["sender_id"]: row["total"] for row in rows}
