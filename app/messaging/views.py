"""
Views for messaging API.

This module provides REST API endpoints for direct messages:
- ChatListView: Ranked chat list
- ConversationMessageViewSet: History and send (nested under a partner)
- ConversationReadView: Mark a conversation as read
- MessageViewSet: Edit and delete a single message

URL Structure:
    /api/v1/messaging/chats/                                   GET
    /api/v1/messaging/conversations/{partner_id}/messages/     GET, POST
    /api/v1/messaging/conversations/{partner_id}/read/         POST
    /api/v1/messaging/messages/{id}/                           PATCH, DELETE

Design Decisions:
    - All operations go through the service layer
    - Service exceptions are rendered by core.exception_handlers
    - Conversations are addressed by the partner's user id
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from messaging.pagination import MessagePagePagination
from messaging.serializers import (
    ConversationSummarySerializer,
    MarkReadResponseSerializer,
    MessageSerializer,
    MessageTextSerializer,
)
from messaging.services import ConversationService, MessageService


class ChatListView(APIView):
    """
    API view for the chat list.

    GET: One row per conversation partner, most recent conversation first
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_chats",
        summary="Chat list",
        responses={200: ConversationSummarySerializer(many=True)},
        tags=["Messaging"],
    )
    def get(self, request):
        chats = ConversationService.build_chat_list(request.user)
        return Response(ConversationSummarySerializer(chats, many=True).data)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_conversation_messages",
        summary="List messages with a partner",
        parameters=[
            OpenApiParameter(
                name="page",
                type=int,
                required=False,
                description="1-indexed page number (25 messages per page)",
            ),
        ],
        responses={200: MessageSerializer(many=True)},
        tags=["Messaging"],
    ),
    create=extend_schema(
        operation_id="send_message",
        summary="Send message",
        request=MessageTextSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Invalid text or unknown receiver"),
        },
        tags=["Messaging"],
    ),
)
class ConversationMessageViewSet(viewsets.ViewSet):
    """
    ViewSet for the messages between the caller and one partner.

    list:
        Messages in either direction, newest first, 25 per page.

    create:
        Send a message to the partner.
    """

    permission_classes = [IsAuthenticated]
    pagination_class = MessagePagePagination

    def list(self, request, partner_pk=None):
        """Get one page of the conversation."""
        paginator = self.pagination_class()
        page = paginator.get_page_number(request)

        messages = MessageService.list_between(request.user, partner_pk, page)

        serializer = MessageSerializer(messages, many=True)
        return paginator.get_paginated_response(serializer.data)

    def create(self, request, partner_pk=None):
        """Send a message."""
        serializer = MessageTextSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = MessageService.send_message(
            sender=request.user,
            receiver_id=partner_pk,
            text=serializer.validated_data["text"],
        )

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class ConversationReadView(APIView):
    """
    API view for read receipts.

    POST: Mark every message the partner sent to the caller as read
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="mark_conversation_read",
        summary="Mark conversation as read",
        request=None,
        responses={200: MarkReadResponseSerializer},
        tags=["Messaging"],
    )
    def post(self, request, partner_pk=None):
        count = MessageService.mark_read(request.user, partner_pk)
        return Response({"count": count})


@extend_schema_view(
    partial_update=extend_schema(
        operation_id="edit_message",
        summary="Edit message",
        description=(
            "Replace the text of a message you sent. Edits are allowed "
            "within 300 seconds of sending."
        ),
        request=MessageTextSerializer,
        responses={
            200: MessageSerializer,
            400: OpenApiResponse(description="Invalid text or edit window expired"),
            403: OpenApiResponse(description="Cannot edit messages from other users"),
            404: OpenApiResponse(description="Message not found"),
        },
        tags=["Messaging"],
    ),
    destroy=extend_schema(
        operation_id="delete_message",
        summary="Delete message",
        responses={
            204: OpenApiResponse(description="Message deleted"),
            400: OpenApiResponse(description="Edit window expired"),
            403: OpenApiResponse(description="Cannot delete messages from other users"),
            404: OpenApiResponse(description="Message not found"),
        },
        tags=["Messaging"],
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for mutating a single message.

    partial_update:
        Edit a message within the window. Sender only.

    destroy:
        Permanently delete a message within the window. Sender only.
    """

    permission_classes = [IsAuthenticated]

    def partial_update(self, request, pk=None):
        """Edit a message."""
        serializer = MessageTextSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = MessageService.edit_message(
            user=request.user,
            message_id=pk,
            text=serializer.validated_data["text"],
        )

        return Response(MessageSerializer(message).data)

    def destroy(self, request, pk=None):
        """Delete a message."""
        MessageService.delete_message(user=request.user, message_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
