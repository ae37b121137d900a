"""
Test configuration and fixtures for chat tests.

This module provides:
- A pair of users and JWT clients for both of them
- Chat and message fixtures
- RecordingBroadcaster, an in-memory ChatBroadcaster

Usage:
    def test_example(alice_client, bob):
        response = alice_client.get(f"/api/v1/chat/chats/?user={bob.id}")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import ChatFactory, MessageFactory


class RecordingBroadcaster:
    """ChatBroadcaster that keeps every (channel, payload) it is given."""

    def __init__(self):
        self.sent: list[tuple[str, dict]] = []

    def broadcast(self, channel, payload):
        self.sent.append((channel, payload))

    @property
    def channels(self) -> list[str]:
        return [channel for channel, _ in self.sent]


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    return UserFactory(name="Alice")


@pytest.fixture
def bob(db):
    return UserFactory(name="Bob")


@pytest.fixture
def carol(db):
    """A user outside the alice/bob chat."""
    return UserFactory(name="Carol")


@pytest.fixture
def alice_client(alice):
    return _client_for(alice)


@pytest.fixture
def bob_client(bob):
    return _client_for(bob)


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def chat(alice, bob):
    """Empty chat between alice and bob."""
    return ChatFactory(user_lower=alice, user_higher=bob)


@pytest.fixture
def alice_message(chat, alice):
    """Message from alice that is also the chat's last message."""
    message = MessageFactory(chat=chat, sender=alice, content="Is the house still free?")
    chat.last_message = message
    chat.last_update_time = message.created_at
    chat.save(update_fields=["last_message", "last_update_time"])
    return message


# =============================================================================
# Broadcaster Fixtures
# =============================================================================


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()
