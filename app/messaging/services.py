"""
Messaging service layer.

This module provides the business logic for direct messages and the chat
list, encapsulating all reads and writes of Message rows.

Services:
    MessageService: send, edit, delete, list and mark-read operations
    ConversationService: The ranked chat list (one summary per partner)

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures raise core.exceptions subclasses
    - Mutations run in a transaction; edit/delete lock the message row
    - Realtime events are registered on commit, after every check passes

Usage:
    from messaging.services import ConversationService, MessageService

    message = MessageService.send_message(alice, bob.id, "hi")
    MessageService.mark_read(bob, alice.id)
    chats = ConversationService.build_chat_list(alice)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from django.db.models import CharField, Exists, F, OuterRef, Q, Subquery
from django.db.models.functions import Coalesce
from django.utils import timezone

from authentication.services import IdentityDirectory
from contacts.models import Contact
from core.exceptions import NotFoundError, ValidationError
from core.services import BaseService
from messaging import events
from messaging.authorization import MessageAuthorization
from messaging.constants import MESSAGE_CONFIG
from messaging.models import Message

if TYPE_CHECKING:
    from authentication.models import User

logger = logging.getLogger(__name__)


def normalize_page(page) -> int:
    """Coerce a page number to an int >= 1; anything unusable becomes 1."""
    try:
        page = int(page)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Send a text message to another user
        edit_message: Replace the text of an own message within the window
        delete_message: Permanently delete an own message within the window
        list_between: One page of the conversation with a partner, newest first
        mark_read: Mark everything a partner sent to the reader as read
    """

    @classmethod
    def _clean_text(cls, text) -> str:
        """
        Validate message text and return it unchanged.

        Error codes:
            TEXT_REQUIRED: Text missing or not a string
            EMPTY_TEXT: Text empty or whitespace only
            TEXT_TOO_LONG: More than MAX_TEXT_LENGTH characters
        """
        if not isinstance(text, str):
            raise ValidationError(
                "Message text is required",
                error_code="TEXT_REQUIRED",
            )

        # Whitespace only counts as empty; the length limit applies to the raw text
        if len(text.strip()) < MESSAGE_CONFIG.MIN_TEXT_LENGTH:
            raise ValidationError(
                "Message text cannot be empty",
                error_code="EMPTY_TEXT",
            )

        if len(text) > MESSAGE_CONFIG.MAX_TEXT_LENGTH:
            raise ValidationError(
                f"Message text cannot exceed {MESSAGE_CONFIG.MAX_TEXT_LENGTH} characters",
                error_code="TEXT_TOO_LONG",
                details={"max_length": MESSAGE_CONFIG.MAX_TEXT_LENGTH},
            )

        return text

    @classmethod
    def send_message(cls, sender: User, receiver_id, text: str) -> Message:
        """
        Send a text message.

        Args:
            sender: User sending the message
            receiver_id: Id of the receiving user
            text: Message text

        Returns:
            The created Message (read=False)

        Raises:
            ValidationError: Invalid text (see _clean_text), unknown
                receiver (RECEIVER_NOT_FOUND), or receiver is the
                sender (SELF_MESSAGE)
        """
        text = cls._clean_text(text)

        try:
            receiver = IdentityDirectory.get_user(receiver_id)
        except NotFoundError:
            raise ValidationError(
                "Receiver does not exist",
                error_code="RECEIVER_NOT_FOUND",
                details={"receiver_id": receiver_id},
            )

        if receiver.id == sender.id:
            raise ValidationError(
                "You cannot send a message to yourself",
                error_code="SELF_MESSAGE",
            )

        with cls.atomic():
            message = Message.objects.create(
                sender=sender,
                receiver=receiver,
                text=text,
            )
            events.publish_new_message(message)

        cls.get_logger().debug(
            f"User {sender.id} sent message {message.id} to user {receiver.id}"
        )

        return message

    @classmethod
    def edit_message(
        cls,
        user: User,
        message_id,
        text: str,
        now: datetime | None = None,
    ) -> Message:
        """
        Edit a message within the allowed time window.

        Only the sender can edit, and only text changes; created_at and
        read are left untouched.

        Args:
            user: User attempting to edit
            message_id: ID of message to edit
            text: New message text
            now: Time of the request (defaults to timezone.now())

        Returns:
            The updated Message

        Raises:
            ValidationError: Invalid text
            NotFoundError: Message does not exist (MESSAGE_NOT_FOUND)
            AuthorizationError: Caller is not the sender (NOT_SENDER)
            ExpiredWindowError: Window has passed (EDIT_WINDOW_EXPIRED)
        """
        text = cls._clean_text(text)
        now = now or timezone.now()

        with cls.atomic():
            # Lock the row so a concurrent delete cannot interleave
            message = cls._get_locked(message_id)
            MessageAuthorization.check_can_mutate(user, message, now, action="edit")

            message.text = text
            message.save(update_fields=["text", "updated_at"])
            events.publish_message_updated(message)

        cls.get_logger().info(f"User {user.id} edited message {message.id}")

        return message

    @classmethod
    def delete_message(
        cls,
        user: User,
        message_id,
        now: datetime | None = None,
    ) -> None:
        """
        Permanently delete a message within the allowed time window.

        Raises:
            NotFoundError: Message does not exist (MESSAGE_NOT_FOUND)
            AuthorizationError: Caller is not the sender (NOT_SENDER)
            ExpiredWindowError: Window has passed (EDIT_WINDOW_EXPIRED)
        """
        now = now or timezone.now()

        with cls.atomic():
            message = cls._get_locked(message_id)
            MessageAuthorization.check_can_mutate(user, message, now, action="delete")

            message_pk, sender_id, receiver_id = (
                message.id,
                message.sender_id,
                message.receiver_id,
            )
            message.delete()
            events.publish_message_deleted(message_pk, sender_id, receiver_id)

        cls.get_logger().info(f"User {user.id} deleted message {message_pk}")

    @classmethod
    def _get_locked(cls, message_id) -> Message:
        try:
            return Message.objects.select_for_update().get(id=message_id)
        except (Message.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(
                "Message not found",
                error_code="MESSAGE_NOT_FOUND",
                details={"message_id": message_id},
            )

    @classmethod
    def list_between(cls, user: User, partner_id, page=1) -> list[Message]:
        """
        Get one page of the conversation between user and partner.

        Messages in either direction, newest first, PAGE_SIZE per page.
        Pages are 1-indexed and page < 1 is treated as 1. Callers infer
        that more pages exist when a full page comes back.

        Returns:
            List of at most PAGE_SIZE messages
        """
        page = normalize_page(page)
        offset = (page - 1) * MESSAGE_CONFIG.PAGE_SIZE

        queryset = Message.objects.filter(
            Q(sender=user, receiver_id=partner_id)
            | Q(sender_id=partner_id, receiver=user)
        ).order_by("-created_at", "-id")

        return list(queryset[offset : offset + MESSAGE_CONFIG.PAGE_SIZE])

    @classmethod
    def mark_read(cls, reader: User, partner_id) -> int:
        """
        Mark every unread message from partner to reader as read.

        Idempotent: with nothing left unread it returns 0 and publishes
        nothing.

        Returns:
            Number of messages changed
        """
        with cls.atomic():
            count = Message.objects.filter(
                sender_id=partner_id,
                receiver=reader,
                read=False,
            ).update(read=True, updated_at=timezone.now())

            if count:
                events.publish_messages_read(reader.id, int(partner_id), count)

        cls.get_logger().debug(
            f"User {reader.id} marked {count} message(s) from user {partner_id} as read"
        )

        return count


@dataclass(frozen=True)
class ConversationSummary:
    """One chat-list row; derived from Message and Contact, never stored."""

    partner_user_id: int
    display_name: str
    partner_email: str
    last_message_id: int
    last_message_text: str
    last_message_at: datetime
    last_sender_id: int
    read: bool


class ConversationService(BaseService):
    """
    Service for the chat list.

    Methods:
        build_chat_list: Ranked summaries, one per conversation partner
    """

    @classmethod
    def build_chat_list(cls, user: User) -> list[ConversationSummary]:
        """
        Build the chat list for a user in a single query.

        For every user with at least one message exchanged with `user`,
        the latest message of the pair is picked by a correlated subquery
        ordered by (-created_at, -id). The display name is the owner's
        contact name for the partner when one exists, otherwise the
        partner's account name. Rows are sorted newest conversation first.

        Returns:
            List of ConversationSummary; empty if the user has no messages
        """
        from authentication.models import User

        latest = Message.objects.filter(
            Q(sender=user, receiver=OuterRef("pk"))
            | Q(sender=OuterRef("pk"), receiver=user)
        ).order_by("-created_at", "-id")

        contact_name = Contact.objects.filter(
            owner=user,
            contact_user=OuterRef("pk"),
        ).values("display_name")[:1]

        rows = (
            User.objects.filter(Exists(latest))
            .annotate(
                last_message_id=Subquery(latest.values("id")[:1]),
                last_message_text=Subquery(latest.values("text")[:1]),
                last_message_at=Subquery(latest.values("created_at")[:1]),
                last_sender_id=Subquery(latest.values("sender_id")[:1]),
                last_read=Subquery(latest.values("read")[:1]),
                display_name=Coalesce(
                    Subquery(contact_name),
                    F("name"),
                    output_field=CharField(),
                ),
            )
            .order_by("-last_message_at", "-last_message_id")
            .values(
                "id",
                "email",
                "display_name",
                "last_message_id",
                "last_message_text",
                "last_message_at",
                "last_sender_id",
                "last_read",
            )
        )

        return [
            ConversationSummary(
                partner_user_id=row["id"],
                display_name=row["display_name"],
                partner_email=row["email"],
                last_message_id=row["last_message_id"],
                last_message_text=row["last_message_text"],
                last_message_at=row["last_message_at"],
                last_sender_id=row["last_sender_id"],
                read=bool(row["last_read"]),
            )
            for row in rows
        ]
