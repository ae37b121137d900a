"""
Real-time fan-out of chat mutations.

Every pair of users has three channels, one per event kind:

    messageAdded-<lower id>-<higher id>
    messageUpdated-<lower id>-<higher id>
    messageDeleted-<lower id>-<higher id>

The two ids are sorted as strings, so both participants compute the same
names. Each channel is a Channels group; ChatConsumer joins the three groups
of the pair it is watching.

Delivery is fire-and-forget: a participant who is not connected misses the
event and re-fetches the chat over HTTP. A broadcast failure is logged and
never fails the request that caused it.

Usage:
    from chat.broadcast import channel_name, get_default_broadcaster

    broadcaster = get_default_broadcaster()
    broadcaster.broadcast(
        channel_name(ChatEvent.MESSAGE_ADDED, sender.id, recipient.id),
        {"message": {...}, "chat_id": "..."},
    )
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

from chat.constants import CHANNEL_LAYER_EVENT_TYPE, CHANNEL_SEPARATOR, ChatEvent
from chat.models import canonical_pair

logger = logging.getLogger(__name__)


def channel_name(event: str, user_a_id, user_b_id) -> str:
    """
    Channel for ``event`` between two users; symmetric in the two ids.

    Example:
        channel_name("messageAdded", b_id, a_id) == channel_name("messageAdded", a_id, b_id)
    """
    if event not in ChatEvent.ALL:
        raise ValueError(f"Unknown chat event: {event}")
    lower, higher = canonical_pair(user_a_id, user_b_id)
    return CHANNEL_SEPARATOR.join((event, lower, higher))


def pair_channels(user_a_id, user_b_id) -> list[str]:
    """All channels of a user pair, one per event kind."""
    return [channel_name(event, user_a_id, user_b_id) for event in ChatEvent.ALL]


def event_from_channel(channel: str) -> str:
    return channel.split(CHANNEL_SEPARATOR, 1)[0]


@runtime_checkable
class ChatBroadcaster(Protocol):
    """
    Anything that can push a payload to a named channel.

    Services receive a broadcaster as an argument so they can be exercised
    without a live transport.
    """

    def broadcast(self, channel: str, payload: dict[str, Any]) -> None:
        """Deliver ``payload`` to subscribers of ``channel`` (best effort)."""
        ...


class ChannelLayerBroadcaster:
    """
    ChatBroadcaster backed by the Django Channels layer.

    Sends ``{"type": "chat.event", "channel", "event", "payload"}`` to the
    group named after the channel.
    """

    def __init__(self, channel_layer=None):
        self._channel_layer = channel_layer

    @property
    def channel_layer(self):
        return self._channel_layer or get_channel_layer()

    def broadcast(self, channel: str, payload: dict[str, Any]) -> None:
        layer = self.channel_layer
        if layer is None:
            logger.warning(f"No channel layer configured; dropped event on {channel}")
            return

        try:
            async_to_sync(layer.group_send)(
                channel,
                {
                    "type": CHANNEL_LAYER_EVENT_TYPE,
                    "channel": channel,
                    "event": event_from_channel(channel),
                    "payload": payload,
                },
            )
        except Exception:
            logger.warning(f"Failed to broadcast on {channel}", exc_info=True)
            return

        logger.debug(f"Broadcast on {channel}")


def get_default_broadcaster() -> ChatBroadcaster:
    """Broadcaster used when a caller does not inject one."""
    return ChannelLayerBroadcaster()


def broadcast_on_commit(
    broadcaster: ChatBroadcaster,
    event: str,
    user_a_id,
    user_b_id,
    payload: dict[str, Any],
) -> None:
    """
    Schedule a broadcast for when the current transaction commits.

    Outside a transaction the broadcast runs immediately. If the transaction
    rolls back nothing is sent.
    """
    channel = channel_name(event, user_a_id, user_b_id)
    transaction.on_commit(
        lambda: broadcaster.broadcast(channel, payload),
        robust=True,
    )
