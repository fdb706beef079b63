"""
Django admin configuration for contacts.
"""

from django.contrib import admin

from contacts.models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    """Admin interface for Contact model."""

    list_display = ["id", "owner", "contact_user", "display_name", "created_at"]
    search_fields = ["display_name", "owner__email", "contact_user__email"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["owner", "contact_user"]
    ordering = ["owner", "display_name"]
