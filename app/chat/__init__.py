"""
Chat app for two-party messaging.

This app handles:
- Chats between exactly two users
- Message sending, editing and deletion
- WebSocket real-time updates

Related apps:
    - authentication: User model for participants
    - payments: Coin balance debited for every message

WebSocket Support:
    Uses Django Channels for real-time communication.
    See broadcast.py for channel naming and fan-out, consumers.py for the
    WebSocket handler and routing.py for the URL pattern.

Usage:
    from chat.services import ChatService, MessageService

    # Send message (creates the chat on first contact)
    result = MessageService.add_message(
        sender=user,
        recipient_id=other_user.id,
        content="Hello!",
    )

    # Load the chat between two users
    result = ChatService.find_chat(user, other_user.id)
"""
