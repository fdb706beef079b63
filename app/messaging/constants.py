"""
Constants and configuration for messaging.

Import example:
    from messaging.constants import MESSAGE_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Content limits
    MAX_TEXT_LENGTH: Final[int] = 1000  # Characters
    MIN_TEXT_LENGTH: Final[int] = 1

    # Edit/delete window, measured from created_at
    EDIT_WINDOW_SECONDS: Final[int] = 300  # 5 minutes

    # Conversation history pagination
    PAGE_SIZE: Final[int] = 25
