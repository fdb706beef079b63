"""
Django admin configuration for messaging models.

Provides admin interfaces for:
- Message moderation
"""

from django.contrib import admin

from messaging.models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "sender",
        "receiver",
        "text_preview",
        "read",
        "created_at",
    ]
    list_filter = ["read", "created_at"]
    search_fields = ["text", "sender__email", "receiver__email"]
    readonly_fields = ["sender", "receiver", "created_at", "updated_at"]
    raw_id_fields = ["sender", "receiver"]
    ordering = ["-created_at", "-id"]

    @admin.display(description="Text")
    def text_preview(self, obj):
        """Show truncated message text."""
        return obj.text[:50] + "..." if len(obj.text) > 50 else obj.text
