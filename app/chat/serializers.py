"""
Serializers for chat API.

Serializer Hierarchy:
    MessageSerializer: Message as returned by the API and in real-time events
    ChatSerializer: Full chat with participants and messages (oldest first)
    ChatListSerializer: Chat preview for the caller's chat list
    MessageCreateSerializer: POST body of a new message
    MessageUpdateSerializer: PATCH body of an edit

Design Decisions:
    - Read and write serializers are separate
    - ``recipientId`` is accepted as a plain string; the service decides
      whether it is a well-formed identifier
    - Content is not trimmed or length-checked here so that blank or
      oversized content reaches the service and gets its own error_code
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.models import Chat, Message

if TYPE_CHECKING:
    from authentication.models import User


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """
    A single message.

    ``seen`` is reserved for read receipts and is always false.
    """

    chat_id = serializers.UUIDField(read_only=True)
    sender_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "sender_id",
            "content",
            "seen",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """POST /api/v1/chat/messages/ body."""

    content = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        help_text="Message text",
    )
    recipientId = serializers.CharField(
        help_text="Id of the user receiving the message",
    )


class MessageUpdateSerializer(serializers.Serializer):
    """PATCH /api/v1/chat/messages/<id>/ body."""

    content = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        help_text="Replacement message text",
    )


class MessageSentSerializer(serializers.Serializer):
    """Response of a successful POST /api/v1/chat/messages/."""

    message = MessageSerializer()
    chat_id = serializers.UUIDField(source="chat.id")
    chat_created = serializers.BooleanField()
    coins_remaining = serializers.IntegerField()


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatListSerializer(serializers.ModelSerializer):
    """Chat preview: participants and the last message, no history."""

    users = serializers.SerializerMethodField()
    last_message = MessageSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Chat
        fields = ["id", "users", "last_message", "last_update_time", "created_at"]
        read_only_fields = fields

    def get_users(self, obj: Chat) -> list[dict]:
        return UserSummarySerializer(
            obj.participants, many=True, context=self.context
        ).data


class ChatSerializer(ChatListSerializer):
    """Chat with its full message history, oldest first."""

    messages = serializers.SerializerMethodField()

    class Meta(ChatListSerializer.Meta):
        fields = [
            "id",
            "users",
            "messages",
            "last_message",
            "last_update_time",
            "created_at",
        ]
        read_only_fields = fields

    def get_messages(self, obj: Chat) -> list[dict]:
        return MessageSerializer(obj.messages.all(), many=True).data


def empty_chat_payload(caller: User, other: User, context=None) -> dict:
    """
    Placeholder returned when two users have no chat yet.

    Same shape as ChatSerializer, with nothing persisted.
    """
    return {
        "id": None,
        "users": UserSummarySerializer(
            [caller, other], many=True, context=context or {}
        ).data,
        "messages": [],
        "last_message": None,
        "last_update_time": None,
        "created_at": None,
    }
