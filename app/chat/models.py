"""
Chat models.

Models:
    Chat: A persistent thread between exactly two users
    Message: A single piece of content authored by one chat participant

Design Decisions:
    - A chat stores its two participants in canonical order (the user whose
      id sorts first as a string is ``user_lower``). A unique constraint on
      the pair guarantees at most one chat per unordered pair of users,
      whoever starts the conversation.
    - The chat's messages are the Message rows pointing at it; there is no
      second copy of the list. ``last_message`` is a denormalized pointer for
      thread previews and is always rewritten in the same transaction as the
      message change that affects it.
    - "Latest" means greatest ``created_at`` (ties broken by id), never the
      greatest id.
    - ``Message.seen`` is reserved for read receipts; nothing sets it yet.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

if TYPE_CHECKING:
    from authentication.models import User


def canonical_pair(user_a_id, user_b_id) -> tuple[str, str]:
    """
    Order two user ids by their string form.

    Returns:
        (lower, higher) as strings; identical for (a, b) and (b, a)
    """
    a, b = str(user_a_id), str(user_b_id)
    return (a, b) if a < b else (b, a)


class ChatQuerySet(models.QuerySet):
    """QuerySet helpers for looking chats up by participant."""

    def for_user(self, user_id) -> ChatQuerySet:
        """Chats in which ``user_id`` is one of the two participants."""
        return self.filter(Q(user_lower_id=user_id) | Q(user_higher_id=user_id))

    def for_pair(self, user_a_id, user_b_id) -> ChatQuerySet:
        """The (at most one) chat between two users, in either order."""
        lower, higher = canonical_pair(user_a_id, user_b_id)
        return self.filter(user_lower_id=lower, user_higher_id=higher)


class Chat(UUIDPrimaryKeyMixin, BaseModel):
    """
    A thread between exactly two users.

    Created lazily by the first message between the pair; deleted explicitly
    by either participant, which cascades to every message.

    Fields:
        user_lower: Participant whose id sorts first
        user_higher: Participant whose id sorts second
        last_message: Most recent message (NULL when the chat is empty)
        last_update_time: When a message in this chat last changed

    Constraints:
        - UniqueConstraint(user_lower, user_higher): one chat per pair
        - CheckConstraint(user_lower < user_higher): canonical order, which
          also rules out a chat with oneself
    """

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="Participant whose id sorts first",
    )
    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="Participant whose id sorts second",
    )
    last_message = models.ForeignKey(
        "chat.Message",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Most recent message, for thread previews",
    )
    last_update_time = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="When a message in this chat was last added, edited or deleted",
    )

    objects = ChatQuerySet.as_manager()

    class Meta:
        db_table = "chat_chat"
        ordering = ["-last_update_time", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_chat_per_user_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="chat_user_lower_less_than_higher",
            ),
        ]
        indexes = [
            models.Index(fields=["user_higher"], name="chat_user_higher_idx"),
        ]

    def __str__(self) -> str:
        return f"Chat({self.user_lower_id}, {self.user_higher_id})"

    @property
    def participants(self) -> list[User]:
        return [self.user_lower, self.user_higher]

    def has_participant(self, user_id) -> bool:
        return str(user_id) in {str(self.user_lower_id), str(self.user_higher_id)}

    def latest_message(self) -> Message | None:
        """Most recent remaining message by creation time (ties: greatest id)."""
        return self.messages.order_by("-created_at", "-id").first()


class Message(UUIDPrimaryKeyMixin, BaseModel):
    """
    A message within a chat.

    Fields:
        chat: Chat this message belongs to (deleted with the chat)
        sender: Author; always one of the chat's two participants
        content: Message text
        seen: Reserved for read receipts; always False for now
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Chat this message belongs to",
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who wrote this message",
    )
    content = models.TextField(
        help_text="Message text",
    )
    seen = models.BooleanField(
        default=False,
        help_text="Reserved for read receipts (not maintained)",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["chat", "created_at", "id"],
                name="chat_msg_chat_created_idx",
            ),
            models.Index(
                fields=["sender", "-created_at"],
                name="chat_msg_sender_idx",
            ),
        ]

    def __str__(self) -> str:
        preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        return f"User {self.sender_id}: {preview}"
