"""
Chat application configuration.

This app provides two-party chat with:
- One chat per pair of users, created by the first message
- Message add, edit and delete with a coin cost per message
- Real-time events over Django Channels
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
