"""
Constants for the chat module.

Centralizes:
- Real-time event names (also the prefix of every channel name)
- WebSocket close codes
- Service error codes

Import example:
    from chat.constants import ChatEvent, ERROR_CODES
"""

from typing import Final


# =============================================================================
# Real-Time Events
# =============================================================================


class ChatEvent:
    """Event kinds broadcast on a pair's channels."""

    MESSAGE_ADDED: Final[str] = "messageAdded"
    MESSAGE_UPDATED: Final[str] = "messageUpdated"
    MESSAGE_DELETED: Final[str] = "messageDeleted"

    ALL: Final[tuple[str, ...]] = (MESSAGE_ADDED, MESSAGE_UPDATED, MESSAGE_DELETED)


# Separator between the event name and the two sorted user ids
CHANNEL_SEPARATOR: Final[str] = "-"

# Channel layer message type handled by ChatConsumer.chat_event
CHANNEL_LAYER_EVENT_TYPE: Final[str] = "chat.event"


# =============================================================================
# WebSocket Close Codes
# =============================================================================


class CLOSE_CODES:
    UNAUTHENTICATED: Final[int] = 4001
    USER_NOT_FOUND: Final[int] = 4004
    SAME_USER: Final[int] = 4009


# =============================================================================
# Error Codes
# =============================================================================


class ERROR_CODES:
    """error_code values returned by ChatService and MessageService."""

    INVALID_ID: Final[str] = "INVALID_ID"
    SAME_USER: Final[str] = "SAME_USER"
    USER_NOT_FOUND: Final[str] = "USER_NOT_FOUND"
    CHAT_NOT_FOUND: Final[str] = "CHAT_NOT_FOUND"
    MESSAGE_NOT_FOUND: Final[str] = "MESSAGE_NOT_FOUND"
    NOT_AUTHOR: Final[str] = "NOT_AUTHOR"
    EMPTY_CONTENT: Final[str] = "EMPTY_CONTENT"
    CONTENT_TOO_LONG: Final[str] = "CONTENT_TOO_LONG"
    INSUFFICIENT_FUNDS: Final[str] = "INSUFFICIENT_FUNDS"
