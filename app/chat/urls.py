"""
URL configuration for chat API.

URL Structure:
    /chats/                 GET (list, or ?user=<id> for one chat), DELETE ?user=<id>
    /messages/              POST
    /messages/<id>/         PATCH, DELETE

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
Message ids are matched as plain strings so that malformed ids reach the
view and are reported with an error_code.
"""

from django.urls import path

from chat.views import ChatView, MessageCreateView, MessageDetailView

app_name = "chat"

urlpatterns = [
    path("chats/", ChatView.as_view(), name="chats"),
    path("messages/", MessageCreateView.as_view(), name="message-list"),
    path(
        "messages/<str:message_id>/",
        MessageDetailView.as_view(),
        name="message-detail",
    ),
]
