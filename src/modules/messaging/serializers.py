"""Messaging DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.messaging.constants import MAX_CONTENT_LENGTH


class SendMessageSerializer(serializers.Serializer):
    recipient = serializers.CharField(max_length=150)
    content = serializers.CharField(max_length=MAX_CONTENT_LENGTH)


class MessageSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    sender = serializers.CharField(source="sender.username")
    recipient = serializers.CharField(source="recipient.username")
    content = serializers.CharField()
    read = serializers.BooleanField()
    timestamp = serializers.DateTimeField(source="created_at")


class ConversationSerializer(serializers.Serializer):
    username = serializers.CharField(source="counterpart.username")
    lastMessage = MessageSerializer(source="last_message")
    unreadCount = serializers.IntegerField(source="unread_count")
