"""
API views for chat.

URL Structure:
    /api/v1/chat/chats/?user=<id>      GET (find), DELETE
    /api/v1/chat/chats/                GET (list)
    /api/v1/chat/messages/             POST
    /api/v1/chat/messages/<id>/        PATCH, DELETE

Design Decisions:
    - All business rules live in chat.services; views parse input, call the
      service and translate the error_code to an HTTP status
    - Malformed ids are 400 everywhere except on message send and message
      delete, where clients rely on 422
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.constants import ERROR_CODES
from chat.serializers import (
    ChatListSerializer,
    ChatSerializer,
    MessageCreateSerializer,
    MessageSentSerializer,
    MessageSerializer,
    MessageUpdateSerializer,
    empty_chat_payload,
)
from chat.services import ChatService, MessageService

ERROR_STATUS = {
    ERROR_CODES.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ERROR_CODES.EMPTY_CONTENT: status.HTTP_400_BAD_REQUEST,
    ERROR_CODES.CONTENT_TOO_LONG: status.HTTP_400_BAD_REQUEST,
    ERROR_CODES.NOT_AUTHOR: status.HTTP_403_FORBIDDEN,
    ERROR_CODES.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ERROR_CODES.CHAT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ERROR_CODES.MESSAGE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ERROR_CODES.SAME_USER: status.HTTP_409_CONFLICT,
    ERROR_CODES.INSUFFICIENT_FUNDS: status.HTTP_422_UNPROCESSABLE_ENTITY,
}

# Endpoints that report a malformed id as 422 instead of 400
UNPROCESSABLE_ID = {ERROR_CODES.INVALID_ID: status.HTTP_422_UNPROCESSABLE_ENTITY}


def failure_response(result, overrides: dict | None = None) -> Response:
    """Render a failed ServiceResult with the status its error_code maps to."""
    statuses = {**ERROR_STATUS, **(overrides or {})}
    return Response(
        result.to_response(),
        status=statuses.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


USER_PARAMETER = OpenApiParameter(
    name="user",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    description="Id of the other participant",
)


class ChatView(APIView):
    """
    The caller's chats.

    GET    /api/v1/chat/chats/             List the caller's chats
    GET    /api/v1/chat/chats/?user=<id>   The chat with one user
    DELETE /api/v1/chat/chats/?user=<id>   Delete the chat with one user
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_chats",
        summary="Get a chat or list chats",
        description=(
            "With ?user=<id>, returns the chat between the caller and that user "
            "with its messages oldest first, or an empty placeholder (id null) "
            "if they have not exchanged messages yet. Without it, returns every "
            "chat of the caller, most recently active first."
        ),
        parameters=[USER_PARAMETER],
        responses={
            200: OpenApiResponse(response=ChatSerializer),
            400: OpenApiResponse(description="Malformed user id"),
            404: OpenApiResponse(description="User not found"),
            409: OpenApiResponse(description="User id is the caller"),
        },
        tags=["Chat"],
    )
    def get(self, request):
        other_user_id = request.query_params.get("user")
        if other_user_id is None:
            chats = ChatService.list_chats(request.user)
            return Response(
                ChatListSerializer(chats, many=True, context={"request": request}).data
            )

        result = ChatService.find_chat(request.user, other_user_id)
        if not result.success:
            return failure_response(result)

        lookup = result.data
        if lookup.chat is None:
            return Response(
                empty_chat_payload(
                    lookup.caller, lookup.other, context={"request": request}
                )
            )
        return Response(ChatSerializer(lookup.chat, context={"request": request}).data)

    @extend_schema(
        operation_id="delete_chat",
        summary="Delete a chat",
        description="Delete the chat with the given user and all of its messages.",
        parameters=[USER_PARAMETER],
        responses={
            204: OpenApiResponse(description="Chat deleted"),
            400: OpenApiResponse(description="Missing or malformed user id"),
            404: OpenApiResponse(description="User or chat not found"),
            409: OpenApiResponse(description="User id is the caller"),
        },
        tags=["Chat"],
    )
    def delete(self, request):
        other_user_id = request.query_params.get("user")
        if not other_user_id:
            return Response(
                {
                    "error": "The user query parameter is required",
                    "error_code": ERROR_CODES.INVALID_ID,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = ChatService.delete_chat(request.user, other_user_id)
        if not result.success:
            return failure_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)


class MessageCreateView(APIView):
    """POST /api/v1/chat/messages/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="send_message",
        summary="Send a message",
        description=(
            "Send a message to another user. The chat between the two users is "
            "created on first contact. Each message costs MESSAGE_COIN_COST coins."
        ),
        request=MessageCreateSerializer,
        responses={
            201: OpenApiResponse(response=MessageSentSerializer),
            400: OpenApiResponse(description="Empty or too long content"),
            404: OpenApiResponse(description="Recipient not found"),
            409: OpenApiResponse(description="Recipient is the sender"),
            422: OpenApiResponse(description="Malformed recipient id or not enough coins"),
        },
        tags=["Chat"],
    )
    def post(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.add_message(
            sender=request.user,
            recipient_id=serializer.validated_data["recipientId"],
            content=serializer.validated_data["content"],
        )
        if not result.success:
            return failure_response(result, UNPROCESSABLE_ID)

        return Response(
            MessageSentSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )


class MessageDetailView(APIView):
    """
    PATCH  /api/v1/chat/messages/<id>/   Edit one's own message
    DELETE /api/v1/chat/messages/<id>/   Delete one's own message
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="edit_message",
        summary="Edit a message",
        request=MessageUpdateSerializer,
        responses={
            200: OpenApiResponse(response=MessageSerializer),
            400: OpenApiResponse(description="Malformed id or empty content"),
            403: OpenApiResponse(description="Not the author"),
            404: OpenApiResponse(description="Message not found"),
        },
        tags=["Chat"],
    )
    def patch(self, request, message_id):
        serializer = MessageUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.update_message(
            editor=request.user,
            message_id=message_id,
            content=serializer.validated_data["content"],
        )
        if not result.success:
            return failure_response(result)

        return Response(MessageSerializer(result.data).data)

    @extend_schema(
        operation_id="delete_message",
        summary="Delete a message",
        responses={
            200: OpenApiResponse(response=MessageSerializer),
            403: OpenApiResponse(description="Not the author"),
            404: OpenApiResponse(description="Message not found"),
            422: OpenApiResponse(description="Malformed message id"),
        },
        tags=["Chat"],
    )
    def delete(self, request, message_id):
        result = MessageService.delete_message(
            requester=request.user,
            message_id=message_id,
        )
        if not result.success:
            return failure_response(result, UNPROCESSABLE_ID)

        return Response(result.data.message)
