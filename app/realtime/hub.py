"""
Realtime fan-out hub.

Services publish named events to identities through RealtimeHub. Delivery
goes over the Channels channel layer: every connection of an identity is a
member of that identity's group, so one group_send reaches all of them.

Delivery is best-effort and at-most-once:
    - Identities with no open connection simply miss the event
    - Channel-layer failures are logged and never raised to the caller

Usage:
    from realtime.hub import RealtimeHub

    # Inside a service transaction; sent only if the transaction commits
    RealtimeHub.publish_on_commit(
        [message.sender_id, message.receiver_id],
        RealtimeEvent.NEW_MESSAGE,
        message_payload(message),
    )
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

from realtime.constants import REALTIME_CONFIG
from realtime.groups import aux_group, identity_group

logger = logging.getLogger(__name__)


class RealtimeHub:
    """
    Publish API over the channel layer.

    Methods:
        publish: Send an event to one identity
        publish_to: Send an event to several identities, once each
        publish_on_commit: publish_to after the current transaction commits
        publish_channel: Send an event to an auxiliary channel
    """

    @classmethod
    def _send(cls, group: str, event: str, payload: dict[str, Any]) -> bool:
        channel_layer = get_channel_layer()
        if channel_layer is None:
            logger.warning(f"No channel layer configured, dropping {event} for {group}")
            return False

        try:
            async_to_sync(channel_layer.group_send)(
                group,
                {
                    "type": REALTIME_CONFIG.LAYER_MESSAGE_TYPE,
                    "event": event,
                    "data": payload,
                },
            )
        except Exception:
            logger.exception(f"Failed to publish {event} to {group}")
            return False

        logger.debug(f"Published {event} to {group}")
        return True

    @classmethod
    def publish(cls, identity_id, event: str, payload: dict[str, Any]) -> bool:
        """
        Send an event to every connection of one identity.

        Returns:
            True if the channel layer accepted the send, False otherwise
        """
        return cls._send(identity_group(identity_id), event, payload)

    @classmethod
    def publish_to(
        cls,
        identity_ids: Iterable,
        event: str,
        payload: dict[str, Any],
    ) -> None:
        """
        Send an event to several identities.

        Duplicate ids are collapsed so an identity listed twice (a sender
        who is also the receiver, for instance) is notified once.
        """
        for identity_id in dict.fromkeys(identity_ids):
            cls.publish(identity_id, event, payload)

    @classmethod
    def publish_on_commit(
        cls,
        identity_ids: Iterable,
        event: str,
        payload: dict[str, Any],
    ) -> None:
        """
        Defer publish_to until the surrounding transaction commits.

        Outside a transaction the event is sent immediately. If the
        transaction rolls back, nothing is sent.
        """
        recipients = list(identity_ids)
        transaction.on_commit(lambda: cls.publish_to(recipients, event, payload))

    @classmethod
    def publish_channel(cls, name: str, event: str, payload: dict[str, Any]) -> bool:
        """
        Send an event to an auxiliary channel.

        Returns False without sending if the channel name is invalid.
        """
        group = aux_group(name)
        if group is None:
            logger.warning(f"Invalid auxiliary channel name {name!r}, dropping {event}")
            return False
        return cls._send(group, event, payload)
