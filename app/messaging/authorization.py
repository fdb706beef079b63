"""
Service-level authorization for message mutations.

Only the sender of a message may edit or delete it, and only while the
edit window is open. The window check is a pure predicate over
(now, created_at, window) so it can be tested without a clock.

Error Codes:
    NOT_SENDER: Caller is not the sender of the message
    EDIT_WINDOW_EXPIRED: The edit window has closed

Usage:
    with transaction.atomic():
        message = Message.objects.select_for_update().get(id=message_id)
        MessageAuthorization.check_can_mutate(user, message, now)
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from core.exceptions import AuthorizationError
from messaging.constants import MESSAGE_CONFIG
from messaging.exceptions import ExpiredWindowError

if TYPE_CHECKING:
    from authentication.models import User
    from messaging.models import Message


def is_within_edit_window(
    now: datetime,
    created_at: datetime,
    window_seconds: int = MESSAGE_CONFIG.EDIT_WINDOW_SECONDS,
) -> bool:
    """
    Return True while now - created_at <= window_seconds.

    The boundary itself is inside the window.
    """
    return (now - created_at).total_seconds() <= window_seconds


class MessageAuthorization:
    """Stateless authorization checks for message mutations."""

    @classmethod
    def is_sender(cls, user: User, message: Message) -> bool:
        return message.sender_id == user.id

    @classmethod
    def check_can_mutate(
        cls,
        user: User,
        message: Message,
        now: datetime,
        action: str = "edit",
    ) -> None:
        """
        Raise unless user may edit or delete message at time now.

        Raises:
            AuthorizationError: Caller is not the sender
            ExpiredWindowError: now is past the edit window
        """
        if not cls.is_sender(user, message):
            raise AuthorizationError(
                f"You can only {action} your own messages",
                error_code="NOT_SENDER",
                details={"message_id": message.id},
            )

        if not is_within_edit_window(now, message.created_at):
            raise ExpiredWindowError(
                f"Messages can only be changed within "
                f"{MESSAGE_CONFIG.EDIT_WINDOW_SECONDS} seconds of sending",
                details={
                    "message_id": message.id,
                    "window_seconds": MESSAGE_CONFIG.EDIT_WINDOW_SECONDS,
                },
            )
