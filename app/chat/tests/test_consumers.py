"""
Tests for ChatConsumer.

Consumer code reaches the database through database_sync_to_async, which
recycles connections; these tests therefore use transactional databases.
Each test drives the consumer through Channels' WebsocketCommunicator
inside a single event loop (async_to_sync), with the in-memory channel
layer configured for tests. The authenticated user is placed on the scope
directly; token handling is covered in test_middleware.py.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync, sync_to_async
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser

from chat.broadcast import ChannelLayerBroadcaster, channel_name
from chat.constants import CLOSE_CODES, ChatEvent
from chat.routing import websocket_urlpatterns

application = URLRouter(websocket_urlpatterns)


def make_communicator(user, other_id):
    communicator = WebsocketCommunicator(application, f"/ws/chat/{other_id}/")
    communicator.scope["user"] = user
    return communicator


@pytest.mark.django_db(transaction=True)
class TestChatConsumerConnect:
    def test_participant_connects(self, alice, bob):
        async def run():
            communicator = make_communicator(alice, bob.id)
            connected, _ = await communicator.connect()
            await communicator.disconnect()
            return connected

        assert async_to_sync(run)() is True

    def test_anonymous_rejected(self, bob):
        async def run():
            communicator = make_communicator(AnonymousUser(), bob.id)
            return await communicator.connect()

        connected, code = async_to_sync(run)()

        assert connected is False
        assert code == CLOSE_CODES.UNAUTHENTICATED

    def test_unknown_counterpart_rejected(self, alice):
        async def run():
            communicator = make_communicator(alice, uuid.uuid4())
            return await communicator.connect()

        connected, code = async_to_sync(run)()

        assert connected is False
        assert code == CLOSE_CODES.USER_NOT_FOUND

    def test_malformed_counterpart_rejected(self, alice):
        async def run():
            communicator = make_communicator(alice, "not-an-id")
            return await communicator.connect()

        connected, code = async_to_sync(run)()

        assert connected is False
        assert code == CLOSE_CODES.USER_NOT_FOUND

    def test_self_rejected(self, alice):
        async def run():
            communicator = make_communicator(alice, alice.id)
            return await communicator.connect()

        connected, code = async_to_sync(run)()

        assert connected is False
        assert code == CLOSE_CODES.SAME_USER


@pytest.mark.django_db(transaction=True)
class TestChatConsumerEvents:
    def test_forwards_pair_events(self, alice, bob):
        """
        Both sides of a pair receive an event on the pair's channel.

        Why it matters: The channel is derived from the sorted ids, so the
        sender's broadcast must reach whichever side is listening.
        """
        channel = channel_name(ChatEvent.MESSAGE_ADDED, bob.id, alice.id)

        async def run():
            alice_socket = make_communicator(alice, bob.id)
            bob_socket = make_communicator(bob, alice.id)
            await alice_socket.connect()
            await bob_socket.connect()

            await get_channel_layer().group_send(
                channel,
                {
                    "type": "chat.event",
                    "channel": channel,
                    "event": ChatEvent.MESSAGE_ADDED,
                    "payload": {"chat_id": "c1"},
                },
            )
            received = (
                await alice_socket.receive_json_from(),
                await bob_socket.receive_json_from(),
            )
            await alice_socket.disconnect()
            await bob_socket.disconnect()
            return received

        for frame in async_to_sync(run)():
            assert frame == {
                "channel": channel,
                "event": "messageAdded",
                "payload": {"chat_id": "c1"},
            }

    def test_other_pairs_not_delivered(self, alice, bob, carol):
        async def run():
            socket = make_communicator(alice, bob.id)
            await socket.connect()

            other = channel_name(ChatEvent.MESSAGE_ADDED, bob.id, carol.id)
            await get_channel_layer().group_send(
                other,
                {"type": "chat.event", "channel": other, "event": "messageAdded", "payload": {}},
            )
            nothing = await socket.receive_nothing(timeout=0.1)
            await socket.disconnect()
            return nothing

        assert async_to_sync(run)() is True

    def test_channel_layer_broadcaster_reaches_socket(self, alice, bob):
        channel = channel_name(ChatEvent.MESSAGE_DELETED, alice.id, bob.id)

        async def run():
            socket = make_communicator(bob, alice.id)
            await socket.connect()
            await sync_to_async(ChannelLayerBroadcaster().broadcast)(
                channel, {"message": {"id": "m1"}}
            )
            frame = await socket.receive_json_from()
            await socket.disconnect()
            return frame

        frame = async_to_sync(run)()

        assert frame["event"] == "messageDeleted"
        assert frame["payload"]["message"]["id"] == "m1"

    def test_client_frames_answered_with_error(self, alice, bob):
        async def run():
            socket = make_communicator(alice, bob.id)
            await socket.connect()
            await socket.send_json_to({"content": "hi"})
            frame = await socket.receive_json_from()
            await socket.disconnect()
            return frame

        assert async_to_sync(run)()["type"] == "error"
