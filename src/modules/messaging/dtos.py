"""Messaging DTOs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from modules.messaging.constants import MAX_CONTENT_LENGTH


class SendMessageDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipient: str = Field(min_length=1, max_length=150)
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)


@dataclass(frozen=True)
class ConversationSummary:
    """Latest message exchanged with one counterpart."""

    counterpart: Any
    last_message: Any
    unread_count: int

    @property
    def last_message_at(self) -> datetime:
        return self.last_message.created_at
