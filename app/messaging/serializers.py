"""
Serializers for messaging API.

Serializers:
    MessageSerializer: Message output
    MessageTextSerializer: Request body for send and edit
    ConversationSummarySerializer: Chat list rows
    MarkReadResponseSerializer: Result of mark-read

Text rules (length, blank) are enforced by MessageService so the API
returns the same error codes as every other caller of the service.
"""

from rest_framework import serializers

from messaging.models import Message


class MessageSerializer(serializers.ModelSerializer):
    """Serializer for Message output."""

    sender_id = serializers.IntegerField(read_only=True)
    receiver_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "sender_id",
            "receiver_id",
            "text",
            "read",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MessageTextSerializer(serializers.Serializer):
    """Request body for sending or editing a message."""

    text = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        help_text="Message text (1-1000 characters)",
    )


class ConversationSummarySerializer(serializers.Serializer):
    """Serializer for ConversationSummary chat list rows."""

    partner_user_id = serializers.IntegerField()
    display_name = serializers.CharField()
    partner_email = serializers.EmailField()
    last_message_id = serializers.IntegerField()
    last_message_text = serializers.CharField()
    last_message_at = serializers.DateTimeField()
    last_sender_id = serializers.IntegerField()
    read = serializers.BooleanField()


class MarkReadResponseSerializer(serializers.Serializer):
    """Response for marking a conversation as read."""

    count = serializers.IntegerField(help_text="Number of messages marked as read")
