"""
Constants for the contact registry.
"""

from typing import Final


class CONTACT_CONFIG:
    """Configuration for contact operations."""

    MAX_DISPLAY_NAME_LENGTH: Final[int] = 100
    MIN_DISPLAY_NAME_LENGTH: Final[int] = 1
