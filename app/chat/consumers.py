"""
WebSocket consumers for the chat application.

Consumers:
    ChatConsumer: Delivers real-time events of one chat to a participant

Authentication:
    Users are authenticated via JWT token passed as query parameter.
    JWTAuthMiddleware attaches the user to self.scope["user"].

Channel Groups:
    A connection to ws/chat/<user_id>/ joins the three groups of the pair
    (caller, user_id), one per event kind (see chat.broadcast). The pair's
    chat does not need to exist yet: the first messageAdded event announces
    it.

Message Types (to client):
    {"channel": "messageAdded-<id>-<id>", "event": "messageAdded", "payload": {...}}
    {"type": "error", "message": "..."}

Clients send messages over HTTP; anything received on the socket is
answered with an error.
"""

from __future__ import annotations

import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser

from chat.broadcast import pair_channels
from chat.constants import CLOSE_CODES
from core.helpers import parse_uuid

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer forwarding chat events between two users.

    Attributes:
        other_user_id: The counterpart of the watched chat
        groups_joined: Channel layer groups this connection belongs to
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.other_user_id = None
        self.groups_joined: list[str] = []

    async def connect(self):
        """
        Handle WebSocket connection.

        Validates:
            1. User is authenticated (else close 4001)
            2. Counterpart is a well-formed id of an existing user (else 4004)
            3. Counterpart is not the caller (else 4009)

        On success, joins the pair's groups and accepts the connection.
        """
        user = self.scope.get("user")
        if not user or isinstance(user, AnonymousUser) or not user.is_authenticated:
            logger.warning("Rejected unauthenticated chat connection")
            await self.close(code=CLOSE_CODES.UNAUTHENTICATED)
            return

        raw_id = self.scope["url_route"]["kwargs"]["user_id"]
        other_id = parse_uuid(raw_id)

        if other_id is not None and other_id == user.id:
            logger.warning(f"User {user.id} tried to open a chat with themselves")
            await self.close(code=CLOSE_CODES.SAME_USER)
            return

        if other_id is None or not await self._user_exists(other_id):
            logger.warning(
                f"User {user.id} tried to watch a chat with unknown user {raw_id}"
            )
            await self.close(code=CLOSE_CODES.USER_NOT_FOUND)
            return

        self.other_user_id = other_id
        for group in pair_channels(user.id, other_id):
            await self.channel_layer.group_add(group, self.channel_name)
            self.groups_joined.append(group)

        await self.accept()
        logger.info(f"User {user.id} watching chat with user {other_id}")

    async def disconnect(self, close_code):
        """Leave every group joined in connect()."""
        for group in self.groups_joined:
            await self.channel_layer.group_discard(group, self.channel_name)

        if self.groups_joined:
            logger.info(
                f"User {self.scope['user'].id} stopped watching chat with "
                f"user {self.other_user_id} (code={close_code})"
            )
        self.groups_joined = []

    async def receive_json(self, content, **kwargs):
        await self.send_json(
            {
                "type": "error",
                "message": "This socket only delivers events; send messages over HTTP",
            }
        )

    async def chat_event(self, event):
        """
        Forward a broadcast to the client.

        Called for channel layer messages of type "chat.event".
        """
        await self.send_json(
            {
                "channel": event["channel"],
                "event": event["event"],
                "payload": event["payload"],
            }
        )

    @database_sync_to_async
    def _user_exists(self, user_id) -> bool:
        return get_user_model().objects.filter(pk=user_id, is_active=True).exists()
