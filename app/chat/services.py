"""
Chat service layer.

Services:
    ChatService: Resolve, list and delete the chat between two users
    MessageService: Add, edit and delete messages

Design Principles:
    - Services are stateless (class methods)
    - Expected failures return ServiceResult.failure() with an error_code
      from chat.constants.ERROR_CODES; views choose the HTTP status
    - A message mutation, the coin debit it costs and the chat's
      last-message pointer are written in one transaction
    - Real-time events are broadcast only after that transaction commits,
      through a ChatBroadcaster passed in by the caller

Usage:
    from chat.services import ChatService, MessageService

    result = MessageService.add_message(
        sender=request.user,
        recipient_id=recipient_id,
        content="Is the flat still available?",
    )
    if result:
        sent = result.data
        print(sent.chat.id, sent.chat_created, sent.coins_remaining)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from core.helpers import parse_uuid
from core.services import BaseService, ServiceResult

from chat.broadcast import broadcast_on_commit, get_default_broadcaster
from chat.constants import ERROR_CODES, ChatEvent
from chat.models import Chat, Message, canonical_pair
from chat.serializers import MessageSerializer

if TYPE_CHECKING:
    from authentication.models import User
    from chat.broadcast import ChatBroadcaster


@dataclass
class ChatLookup:
    """
    Result of resolving the chat between the caller and another user.

    ``chat`` is None when the two users have never exchanged a message.
    """

    caller: User
    other: User
    chat: Chat | None


@dataclass
class SentMessage:
    """Outcome of MessageService.add_message."""

    message: Message
    chat: Chat
    chat_created: bool
    coins_remaining: int


@dataclass
class DeletedMessage:
    """
    Outcome of MessageService.delete_message.

    The row no longer exists, so the message is carried as its serialized
    body captured before deletion.
    """

    message: dict[str, Any]
    chat: Chat


def _message_payload(message: Message) -> dict[str, Any]:
    return dict(MessageSerializer(message).data)


class ChatService(BaseService):
    """
    Resolution and removal of the chat between two users.

    Methods:
        resolve_counterpart: Validate the other user of a pair
        find_chat: The pair's chat, or None when it does not exist yet
        list_chats: All chats of a user, most recently active first
        delete_chat: Delete the pair's chat and all of its messages
    """

    @classmethod
    def resolve_counterpart(cls, caller: User, other_user_id) -> ServiceResult[User]:
        """
        Validate ``other_user_id`` as the other side of a chat with ``caller``.

        Error codes:
            INVALID_ID: other_user_id is not a well-formed identifier
            SAME_USER: other_user_id is the caller
            USER_NOT_FOUND: No active user has that id
        """
        other_id = parse_uuid(other_user_id)
        if other_id is None:
            return ServiceResult.failure(
                "User id is not a valid identifier",
                error_code=ERROR_CODES.INVALID_ID,
            )

        if other_id == caller.id:
            return ServiceResult.failure(
                "You cannot chat with yourself",
                error_code=ERROR_CODES.SAME_USER,
            )

        other = get_user_model().objects.filter(pk=other_id, is_active=True).first()
        if other is None:
            return ServiceResult.failure(
                "User not found",
                error_code=ERROR_CODES.USER_NOT_FOUND,
            )

        return ServiceResult.success(other)

    @classmethod
    def find_chat(cls, caller: User, other_user_id) -> ServiceResult[ChatLookup]:
        """
        Find the chat between ``caller`` and ``other_user_id``.

        (A, B) and (B, A) resolve to the same chat. Messages are prefetched
        oldest first.

        Returns:
            ServiceResult with ChatLookup; ``chat`` is None when the pair
            has no chat yet

        Error codes:
            INVALID_ID, SAME_USER, USER_NOT_FOUND (see resolve_counterpart)
        """
        counterpart = cls.resolve_counterpart(caller, other_user_id)
        if not counterpart:
            return counterpart
        other = counterpart.data

        chat = (
            Chat.objects.for_pair(caller.id, other.id)
            .select_related("user_lower", "user_higher", "last_message")
            .prefetch_related("messages")
            .first()
        )

        return ServiceResult.success(ChatLookup(caller=caller, other=other, chat=chat))

    @classmethod
    def list_chats(cls, user: User):
        """Chats in which ``user`` participates, most recent activity first."""
        return (
            Chat.objects.for_user(user.id)
            .select_related("user_lower", "user_higher", "last_message")
            .order_by("-last_update_time", "-created_at")
        )

    @classmethod
    def delete_chat(cls, caller: User, other_user_id) -> ServiceResult[None]:
        """
        Delete the chat between ``caller`` and ``other_user_id``.

        Every message of the chat is deleted with it, in one transaction.

        Error codes:
            INVALID_ID, SAME_USER, USER_NOT_FOUND (see resolve_counterpart)
            CHAT_NOT_FOUND: The pair has no chat
        """
        counterpart = cls.resolve_counterpart(caller, other_user_id)
        if not counterpart:
            return counterpart
        other = counterpart.data

        with cls.atomic():
            chat = (
                Chat.objects.select_for_update()
                .for_pair(caller.id, other.id)
                .first()
            )
            if chat is None:
                return ServiceResult.failure(
                    "Chat not found",
                    error_code=ERROR_CODES.CHAT_NOT_FOUND,
                )

            chat_id = chat.id
            message_count = chat.messages.count()
            chat.delete()

        cls.get_logger().info(
            f"User {caller.id} deleted chat {chat_id} with user {other.id} "
            f"({message_count} messages)"
        )
        return ServiceResult.success(None)


class MessageService(BaseService):
    """
    Message lifecycle within a chat.

    Methods:
        add_message: Send a message, creating the chat on first contact
        update_message: Replace the content of one's own message
        delete_message: Delete one's own message
    """

    @classmethod
    def _validate_content(cls, content) -> ServiceResult[str]:
        if content is None or not str(content).strip():
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code=ERROR_CODES.EMPTY_CONTENT,
            )

        max_length = settings.MESSAGE_MAX_LENGTH
        if len(content) > max_length:
            return ServiceResult.failure(
                f"Message content cannot exceed {max_length} characters",
                error_code=ERROR_CODES.CONTENT_TOO_LONG,
            )

        return ServiceResult.success(content)

    @classmethod
    def _refresh_chat_pointer(cls, chat: Chat) -> None:
        """Point ``chat`` at its latest remaining message and touch it."""
        chat.last_message = chat.latest_message()
        chat.last_update_time = timezone.now()
        chat.save(update_fields=["last_message", "last_update_time", "updated_at"])

    @classmethod
    def add_message(
        cls,
        sender: User,
        recipient_id,
        content: str,
        broadcaster: ChatBroadcaster | None = None,
    ) -> ServiceResult[SentMessage]:
        """
        Send ``content`` from ``sender`` to the user ``recipient_id``.

        Implementation:
            1. Validate content, then the recipient
            2. In one transaction: debit MESSAGE_COIN_COST coins from the
               sender, get or create the pair's chat, create the message and
               point the chat at it
            3. On commit, broadcast messageAdded to the pair

        Args:
            sender: Authenticated user sending the message
            recipient_id: Id of the other user
            content: Message text
            broadcaster: Real-time transport (defaults to the channel layer)

        Returns:
            ServiceResult with SentMessage

        Error codes:
            EMPTY_CONTENT: Content missing or blank
            CONTENT_TOO_LONG: Content longer than MESSAGE_MAX_LENGTH
            INVALID_ID: recipient_id is not a well-formed identifier
            SAME_USER: Sender and recipient are the same user
            USER_NOT_FOUND: No such recipient
            INSUFFICIENT_FUNDS: Sender cannot pay for the message
        """
        from payments.services import CoinService

        checked = cls._validate_content(content)
        if not checked:
            return checked

        counterpart = ChatService.resolve_counterpart(sender, recipient_id)
        if not counterpart:
            return counterpart
        recipient = counterpart.data

        cost = settings.MESSAGE_COIN_COST
        lower, higher = canonical_pair(sender.id, recipient.id)

        with cls.atomic():
            debit = CoinService.debit(sender.id, cost)
            if not debit:
                return debit

            chat, chat_created = Chat.objects.get_or_create(
                user_lower_id=lower,
                user_higher_id=higher,
            )
            chat = Chat.objects.select_for_update().get(pk=chat.pk)

            message = Message.objects.create(
                chat=chat,
                sender=sender,
                content=content,
            )
            cls._refresh_chat_pointer(chat)

            broadcast_on_commit(
                broadcaster or get_default_broadcaster(),
                ChatEvent.MESSAGE_ADDED,
                sender.id,
                recipient.id,
                {
                    "message": _message_payload(message),
                    "chat_id": str(chat.id),
                    "chat_created": chat_created,
                },
            )

        cls.get_logger().info(
            f"User {sender.id} sent message {message.id} to user {recipient.id} "
            f"in chat {chat.id} (created={chat_created}, cost={cost})"
        )

        return ServiceResult.success(
            SentMessage(
                message=message,
                chat=chat,
                chat_created=chat_created,
                coins_remaining=debit.data,
            )
        )

    @classmethod
    def update_message(
        cls,
        editor: User,
        message_id,
        content: str,
        broadcaster: ChatBroadcaster | None = None,
    ) -> ServiceResult[Message]:
        """
        Replace the content of a message.

        Only the author may edit. The message keeps its ``created_at`` and
        its place in the chat; the chat's ``last_update_time`` is refreshed.

        Error codes:
            INVALID_ID: message_id is not a well-formed identifier
            MESSAGE_NOT_FOUND: No such message
            EMPTY_CONTENT: New content missing or blank
            CONTENT_TOO_LONG: New content longer than MESSAGE_MAX_LENGTH
            NOT_AUTHOR: editor did not write the message
        """
        parsed_id = parse_uuid(message_id)
        if parsed_id is None:
            return ServiceResult.failure(
                "Message id is not a valid identifier",
                error_code=ERROR_CODES.INVALID_ID,
            )

        if not Message.objects.filter(pk=parsed_id).exists():
            return ServiceResult.failure(
                "Message not found",
                error_code=ERROR_CODES.MESSAGE_NOT_FOUND,
            )

        checked = cls._validate_content(content)
        if not checked:
            return checked

        with cls.atomic():
            message = (
                Message.objects.select_for_update()
                .select_related("chat")
                .filter(pk=parsed_id)
                .first()
            )
            if message is None:
                return ServiceResult.failure(
                    "Message not found",
                    error_code=ERROR_CODES.MESSAGE_NOT_FOUND,
                )

            if message.sender_id != editor.id:
                return ServiceResult.failure(
                    "Only the author can edit this message",
                    error_code=ERROR_CODES.NOT_AUTHOR,
                )

            message.content = content
            message.save(update_fields=["content", "updated_at"])

            chat = message.chat
            chat.last_update_time = timezone.now()
            chat.save(update_fields=["last_update_time", "updated_at"])

            broadcast_on_commit(
                broadcaster or get_default_broadcaster(),
                ChatEvent.MESSAGE_UPDATED,
                chat.user_lower_id,
                chat.user_higher_id,
                {
                    "message": _message_payload(message),
                    "chat_id": str(chat.id),
                },
            )

        cls.get_logger().info(f"User {editor.id} edited message {message.id}")
        return ServiceResult.success(message)

    @classmethod
    def delete_message(
        cls,
        requester: User,
        message_id,
        broadcaster: ChatBroadcaster | None = None,
    ) -> ServiceResult[DeletedMessage]:
        """
        Delete a message.

        Only the author may delete. With the chat row locked, the message is
        removed and the chat's last message is recomputed from what remains
        (None when the chat is now empty). The chat itself is kept.

        Error codes:
            INVALID_ID: message_id is not a well-formed identifier
            MESSAGE_NOT_FOUND: No such message
            NOT_AUTHOR: requester did not write the message
        """
        parsed_id = parse_uuid(message_id)
        if parsed_id is None:
            return ServiceResult.failure(
                "Message id is not a valid identifier",
                error_code=ERROR_CODES.INVALID_ID,
            )

        message = Message.objects.filter(pk=parsed_id).first()
        if message is None:
            return ServiceResult.failure(
                "Message not found",
                error_code=ERROR_CODES.MESSAGE_NOT_FOUND,
            )

        if message.sender_id != requester.id:
            return ServiceResult.failure(
                "Only the author can delete this message",
                error_code=ERROR_CODES.NOT_AUTHOR,
            )

        with cls.atomic():
            chat = Chat.objects.select_for_update().get(pk=message.chat_id)

            message = Message.objects.filter(pk=parsed_id).first()
            if message is None:
                return ServiceResult.failure(
                    "Message not found",
                    error_code=ERROR_CODES.MESSAGE_NOT_FOUND,
                )

            snapshot = _message_payload(message)
            message.delete()
            cls._refresh_chat_pointer(chat)

            broadcast_on_commit(
                broadcaster or get_default_broadcaster(),
                ChatEvent.MESSAGE_DELETED,
                chat.user_lower_id,
                chat.user_higher_id,
                {
                    "message": snapshot,
                    "chat_id": str(chat.id),
                    "last_message_id": (
                        str(chat.last_message_id) if chat.last_message_id else None
                    ),
                },
            )

        cls.get_logger().info(
            f"User {requester.id} deleted message {parsed_id} from chat {chat.id}"
        )
        return ServiceResult.success(DeletedMessage(message=snapshot, chat=chat))
