"""Messaging API views."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.accounts.repositories import AccountDjangoRepository
from modules.core.exceptions import BadRequest, validation_error_from_pydantic
from modules.messaging.dtos import SendMessageDTO
from modules.messaging.exceptions import MessageToSelf, RecipientNotFound
from modules.messaging.repositories import MessageDjangoRepository
from modules.messaging.serializers import (
    ConversationSerializer,
    MessageSerializer,
    SendMessageSerializer,
)
from modules.messaging.services import MessagingService


def _user_not_found() -> NotFound:
    return NotFound("User not found.", code="user_not_found")


class MessageViewSet(ViewSet):
    """Direct messages of the authenticated user."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = MessagingService(
            message_repository=MessageDjangoRepository(),
            account_repository=AccountDjangoRepository(),
        )

    def create(self, request: Request) -> Response:
        """POST /api/v1/messages"""
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            dto = SendMessageDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            raise validation_error_from_pydantic(exc) from exc

        try:
            message = self._service.send(request.user, dto)
        except RecipientNotFound as exc:
            raise _user_not_found() from exc
        except MessageToSelf as exc:
            raise BadRequest(str(exc), code="message_to_self") from exc
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    def conversations(self, request: Request) -> Response:
        """GET /api/v1/messages/conversations"""
        summaries = self._service.conversations(request.user)
        return Response(ConversationSerializer(summaries, many=True).data)

    def history(self, request: Request, username: str) -> Response:
        """GET /api/v1/messages/with/{username}"""
        try:
            messages = self._service.history(request.user, username)
        except RecipientNotFound as exc:
            raise _user_not_found() from exc
        return Response(MessageSerializer(messages, many=True).data)

    def mark_read(self, request: Request, username: str) -> Response:
        """PATCH /api/v1/messages/with/{username}/read"""
        try:
            count = self._service.mark_read(request.user, username)
        except RecipientNotFound as exc:
            raise _user_not_found() from exc
        return Response({"markedRead": count})
