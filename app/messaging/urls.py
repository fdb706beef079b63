"""
URL configuration for messaging API.

URL Structure:
    /chats/                                   GET
    /conversations/{partner_id}/messages/     GET, POST
    /conversations/{partner_id}/read/         POST
    /messages/{id}/                           PATCH, DELETE

All URLs are prefixed with /api/v1/messaging/ in the main URL configuration.
"""

from django.urls import path

from messaging.views import (
    ChatListView,
    ConversationMessageViewSet,
    ConversationReadView,
    MessageViewSet,
)

app_name = "messaging"

urlpatterns = [
    path("chats/", ChatListView.as_view(), name="chat-list"),
    path(
        "conversations/<int:partner_pk>/messages/",
        ConversationMessageViewSet.as_view({"get": "list", "post": "create"}),
        name="conversation-message-list",
    ),
    path(
        "conversations/<int:partner_pk>/read/",
        ConversationReadView.as_view(),
        name="conversation-read",
    ),
    path(
        "messages/<int:pk>/",
        MessageViewSet.as_view({"patch": "partial_update", "delete": "destroy"}),
        name="message-detail",
    ),
]
