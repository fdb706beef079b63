"""
Base service layer patterns for business logic encapsulation.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Failure Handling:
    Services raise core.exceptions subclasses for expected failures
    (validation, authorization, missing rows). The API layer renders them
    through core.exception_handlers; consumers and tasks catch them directly.

Usage:
    from core.exceptions import DuplicateError
    from core.services import BaseService

    class ContactService(BaseService):
        @classmethod
        def create_contact(cls, owner, target, display_name):
            if Contact.objects.filter(owner=owner, contact_user=target).exists():
                raise DuplicateError("Contact already exists")

            with cls.atomic():
                contact = Contact.objects.create(...)

            cls.get_logger().info(f"Created contact {contact.id}")
            return contact

Related:
    - core.exceptions: Exception taxonomy raised by services
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Raise core.exceptions for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Example:
            class MessageService(BaseService):
                @classmethod
                def send_message(cls, sender, receiver_id, text):
                    cls.get_logger().info(f"Sending message to {receiver_id}")
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back and on_commit callbacks registered
        inside the block are discarded.

        Note:
            This is a thin wrapper around Django's transaction.atomic().
            Use it to make transaction boundaries explicit in service code.
        """
        with transaction.atomic():
            yield

