"""
Messaging models.

Models:
    Message: A text message from one user to another

Design Decisions:
    - A conversation is implicit: all messages between the same two users
    - Only the sender may mutate a message; the receiver only reads it
    - Deleting is a hard delete
    - read only ever moves from False to True
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxLengthValidator
from django.db import models
from django.db.models import F, Q

from core.models import BaseModel
from messaging.constants import MESSAGE_CONFIG


class Message(BaseModel):
    """
    A message between two distinct users.

    Fields:
        sender: User who sent the message (owns mutation rights)
        receiver: User the message was sent to
        text: Message body, 1-1000 characters
        read: Whether the receiver has read the message
        created_at: Creation time, never updated (from BaseModel)
        updated_at: Row bookkeeping (from BaseModel)

    Constraints:
        - CheckConstraint(sender != receiver)
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
        help_text="User this message was sent to",
    )

    text = models.TextField(
        validators=[MaxLengthValidator(MESSAGE_CONFIG.MAX_TEXT_LENGTH)],
        help_text="Message text (1-1000 characters)",
    )

    read = models.BooleanField(
        default=False,
        help_text="Whether the receiver has read this message",
    )

    class Meta:
        db_table = "messaging_message"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=~Q(sender=F("receiver")),
                name="message_sender_not_receiver",
            ),
        ]
        indexes = [
            # Conversation history in either direction
            models.Index(
                fields=["sender", "receiver", "-created_at", "-id"],
                name="msg_pair_created_idx",
            ),
            # Unread messages for a reader
            models.Index(
                fields=["receiver", "sender"],
                name="msg_unread_idx",
                condition=Q(read=False),
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"User {self.sender_id} -> User {self.receiver_id}: {preview}"
