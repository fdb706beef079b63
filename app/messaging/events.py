"""
Realtime events for messaging.

Payload shapes delivered to clients:
    Message:        {id, senderId, receiverId, text, createdAt, read}
    messageDeleted: {messageId, senderId, receiverId}
    messagesRead:   {by, count}

Every publish is registered on transaction commit, so a mutation that
rolls back or fails validation never produces an event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from realtime.constants import RealtimeEvent
from realtime.hub import RealtimeHub

if TYPE_CHECKING:
    from messaging.models import Message


def message_payload(message: Message) -> dict:
    return {
        "id": message.id,
        "senderId": message.sender_id,
        "receiverId": message.receiver_id,
        "text": message.text,
        "createdAt": message.created_at.isoformat(),
        "read": message.read,
    }


def publish_new_message(message: Message) -> None:
    RealtimeHub.publish_on_commit(
        [message.sender_id, message.receiver_id],
        RealtimeEvent.NEW_MESSAGE,
        message_payload(message),
    )


def publish_message_updated(message: Message) -> None:
    RealtimeHub.publish_on_commit(
        [message.sender_id, message.receiver_id],
        RealtimeEvent.MESSAGE_UPDATED,
        message_payload(message),
    )


def publish_message_deleted(message_id, sender_id, receiver_id) -> None:
    RealtimeHub.publish_on_commit(
        [sender_id, receiver_id],
        RealtimeEvent.MESSAGE_DELETED,
        {
            "messageId": message_id,
            "senderId": sender_id,
            "receiverId": receiver_id,
        },
    )


def publish_messages_read(reader_id, partner_id, count: int) -> None:
    RealtimeHub.publish_on_commit(
        [reader_id, partner_id],
        RealtimeEvent.MESSAGES_READ,
        {"by": reader_id, "count": count},
    )
