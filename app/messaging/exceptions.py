"""
Messaging-specific exceptions.

Following the pattern from core.exceptions, these provide specific error
types for message mutations.
"""

from core.exceptions import BaseApplicationError


class ExpiredWindowError(BaseApplicationError):
    """
    Raised when a sender edits or deletes a message after the edit window.

    Example:
        raise ExpiredWindowError(
            "Messages can only be edited within 300 seconds",
            details={"message_id": message.id},
        )
    """

    default_error_code: str = "EDIT_WINDOW_EXPIRED"
    http_status: int = 400
