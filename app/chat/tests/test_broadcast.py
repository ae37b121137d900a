"""
Tests for channel naming and the channel-layer broadcaster.

Test Organization:
    - TestChannelName: naming scheme and symmetry
    - TestChannelLayerBroadcaster: message format and failure handling
    - TestBroadcastOnCommit: delivery only after commit
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from django.db import transaction

from chat.broadcast import (
    ChannelLayerBroadcaster,
    ChatBroadcaster,
    broadcast_on_commit,
    channel_name,
    event_from_channel,
    pair_channels,
)
from chat.constants import ChatEvent
from chat.tests.conftest import RecordingBroadcaster

LOW = "11111111-1111-4111-8111-111111111111"
HIGH = "99999999-9999-4999-8999-999999999999"


class TestChannelName:
    def test_format(self):
        assert channel_name(ChatEvent.MESSAGE_ADDED, HIGH, LOW) == f"messageAdded-{LOW}-{HIGH}"

    def test_symmetric_in_users(self):
        """
        Both participants compute the same channel.

        Why it matters: A subscriber listening on the pair must receive
        events whoever of the two triggered them.
        """
        for event in ChatEvent.ALL:
            assert channel_name(event, LOW, HIGH) == channel_name(event, HIGH, LOW)

    def test_unknown_event_rejected(self):
        with pytest.raises(ValueError):
            channel_name("messageRead", LOW, HIGH)

    def test_pair_channels_one_per_event(self):
        channels = pair_channels(HIGH, LOW)

        assert [event_from_channel(c) for c in channels] == list(ChatEvent.ALL)

    def test_event_from_channel(self):
        assert event_from_channel(f"messageDeleted-{LOW}-{HIGH}") == "messageDeleted"


class TestChannelLayerBroadcaster:
    def test_satisfies_protocol(self):
        assert isinstance(ChannelLayerBroadcaster(), ChatBroadcaster)
        assert isinstance(RecordingBroadcaster(), ChatBroadcaster)

    def test_sends_chat_event_to_group(self):
        layer = MagicMock()
        layer.group_send = AsyncMock()
        channel = channel_name(ChatEvent.MESSAGE_UPDATED, LOW, HIGH)

        ChannelLayerBroadcaster(layer).broadcast(channel, {"chat_id": "c1"})

        layer.group_send.assert_awaited_once_with(
            channel,
            {
                "type": "chat.event",
                "channel": channel,
                "event": "messageUpdated",
                "payload": {"chat_id": "c1"},
            },
        )

    def test_transport_failure_is_logged_not_raised(self):
        """
        A dead channel layer never fails the caller.

        Why it matters: The message is already committed; the request must
        still succeed and clients catch up by re-fetching.
        """
        layer = MagicMock()
        layer.group_send = AsyncMock(side_effect=ConnectionError("redis down"))
        channel = channel_name(ChatEvent.MESSAGE_ADDED, LOW, HIGH)

        with patch("chat.broadcast.logger") as logger:
            ChannelLayerBroadcaster(layer).broadcast(channel, {})

        logger.warning.assert_called_once()
        assert channel in logger.warning.call_args.args[0]


class TestBroadcastOnCommit:
    def test_sent_after_commit(self, db, django_capture_on_commit_callbacks):
        broadcaster = RecordingBroadcaster()

        with django_capture_on_commit_callbacks(execute=True):
            with transaction.atomic():
                broadcast_on_commit(
                    broadcaster, ChatEvent.MESSAGE_ADDED, HIGH, LOW, {"n": 1}
                )
                assert broadcaster.sent == []

        assert broadcaster.sent == [(f"messageAdded-{LOW}-{HIGH}", {"n": 1})]

    def test_not_sent_on_rollback(self, db, django_capture_on_commit_callbacks):
        broadcaster = RecordingBroadcaster()

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            try:
                with transaction.atomic():
                    broadcast_on_commit(
                        broadcaster, ChatEvent.MESSAGE_ADDED, LOW, HIGH, {}
                    )
                    raise RuntimeError("abort")
            except RuntimeError:
                pass

        assert callbacks == []
        assert broadcaster.sent == []
