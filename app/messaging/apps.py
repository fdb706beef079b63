"""
Messaging application configuration.

This app provides:
- Persisted two-party text messages
- Sender-only edit and delete within a time window
- Read tracking per conversation
- The ranked chat list
"""

from django.apps import AppConfig


class MessagingConfig(AppConfig):
    """Configuration for the messaging application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "messaging"
    verbose_name = "Messaging"
