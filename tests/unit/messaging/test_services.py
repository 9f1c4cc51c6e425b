"""Unit tests for MessagingService."""

from __future__ import annotations

import pytest

from modules.accounts.repositories import AccountDjangoRepository
from modules.messaging.dtos import SendMessageDTO
from modules.messaging.exceptions import MessageToSelf, RecipientNotFound
from modules.messaging.models import Message
from modules.messaging.repositories import MessageDjangoRepository
from modules.messaging.services import MessagingService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return MessagingService(
        message_repository=MessageDjangoRepository(),
        account_repository=AccountDjangoRepository(),
    )


def _send(service, sender, recipient, content="hello"):
    dto = SendMessageDTO(recipient=recipient.username, content=content)
    return service.send(sender, dto)


class TestSend:
    def test_send(self, service, user, other_user):
        message = _send(service, user, other_user, "Is the honey still available?")
        assert message.sender == user
        assert message.recipient == other_user
        assert message.read is False

    def test_unknown_recipient(self, service, user):
        with pytest.raises(RecipientNotFound):
            service.send(user, SendMessageDTO(recipient="ghost", content="hi"))

    def test_to_self(self, service, user):
        with pytest.raises(MessageToSelf):
            _send(service, user, user)
        assert Message.objects.count() == 0


class TestHistory:
    def test_history_is_oldest_first_and_both_directions(
        self, service, user, other_user
    ):
        _send(service, user, other_user, "one")
        _send(service, other_user, user, "two")
        _send(service, user, other_user, "three")

        history = service.history(user, other_user.username)

        assert [m.content for m in history] == ["one", "two", "three"]
        assert history == service.history(other_user, user.username)

    def test_history_excludes_third_parties(
        self, service, user, other_user, admin_user
    ):
        _send(service, user, other_user, "mine")
        _send(service, admin_user, other_user, "not mine")
        assert [m.content for m in service.history(user, "lister")] == ["mine"]


class TestMarkRead:
    def test_marks_only_incoming_unread(self, service, user, other_user):
        _send(service, other_user, user, "a")
        _send(service, other_user, user, "b")
        _send(service, user, other_user, "mine")

        assert service.mark_read(user, other_user.username) == 2
        assert service.mark_read(user, other_user.username) == 0
        assert not Message.objects.get(content="mine").read


class TestConversations:
    def test_latest_per_counterpart_with_unread_counts(
        self, service, user, other_user, admin_user
    ):
        _send(service, other_user, user, "first from lister")
        _send(service, other_user, user, "second from lister")
        _send(service, user, admin_user, "to admin")

        summaries = service.conversations(user)

        assert [s.counterpart.username for s in summaries] == ["admin", "lister"]
        by_name = {s.counterpart.username: s for s in summaries}
        assert by_name["lister"].last_message.content == "second from lister"
        assert by_name["lister"].unread_count == 2
        assert by_name["admin"].unread_count == 0

    def test_no_messages(self, service, user):
        assert service.conversations(user) == []
