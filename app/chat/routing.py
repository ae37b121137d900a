"""
WebSocket URL routing for the chat application.

URL Patterns:
    ws/chat/<user_id>/ - Watch the chat between the caller and <user_id>

Authentication:
    JWT access token passed as query parameter: ?token=<jwt_access_token>
    JWTAuthMiddleware validates it and attaches the user to the scope.
"""

from django.urls import re_path

from chat import consumers

websocket_urlpatterns = [
    re_path(
        r"^ws/chat/(?P<user_id>[^/]+)/$",
        consumers.ChatConsumer.as_asgi(),
    ),
]
