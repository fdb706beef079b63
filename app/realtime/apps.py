"""
Realtime application configuration.
"""

from django.apps import AppConfig


class RealtimeConfig(AppConfig):
    """Configuration for the realtime fan-out application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "realtime"
    verbose_name = "Realtime"
