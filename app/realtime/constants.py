"""
Constants for the realtime fan-out.

Import example:
    from realtime.constants import REALTIME_CONFIG, RealtimeEvent
"""

from typing import Final


class REALTIME_CONFIG:
    """Configuration for WebSocket connections and channel groups."""

    # Group prefixes; identity and auxiliary groups never share a prefix
    IDENTITY_GROUP_PREFIX: Final[str] = "identity."
    AUX_GROUP_PREFIX: Final[str] = "aux."

    # Channel layers accept group names shorter than 100 characters
    MAX_AUX_CHANNEL_LENGTH: Final[int] = 80

    # Close code sent after the "unauthorized" frame
    UNAUTHORIZED_CLOSE_CODE: Final[int] = 4001

    # Handshake token sources
    TOKEN_QUERY_PARAM: Final[str] = "token"
    TOKEN_COOKIE_NAME: Final[str] = "token"
    TOKEN_SUBPROTOCOL: Final[str] = "jwt"

    # Channel-layer message type routed to RealtimeConsumer.realtime_event
    LAYER_MESSAGE_TYPE: Final[str] = "realtime.event"


class RealtimeEvent:
    """Event names delivered to clients as the frame "type"."""

    CONNECTED: Final[str] = "connected"
    UNAUTHORIZED: Final[str] = "unauthorized"
    ERROR: Final[str] = "error"

    NEW_MESSAGE: Final[str] = "newMessage"
    MESSAGE_UPDATED: Final[str] = "messageUpdated"
    MESSAGE_DELETED: Final[str] = "messageDeleted"
    MESSAGES_READ: Final[str] = "messagesRead"

    CONTACT_CREATED: Final[str] = "contactCreated"
    CONTACT_UPDATED: Final[str] = "contactUpdated"
    CONTACT_DELETED: Final[str] = "contactDeleted"
