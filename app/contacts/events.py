"""
Realtime events for the contact registry.

Contacts are private, so every event goes to the owner's channel only.

Payload shapes:
    Contact:        {id, ownerId, contactUserId, displayName,
                     contactUser: {id, name, email}}
    contactDeleted: {contactId}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from authentication.services import Identity
from realtime.constants import RealtimeEvent
from realtime.hub import RealtimeHub

if TYPE_CHECKING:
    from contacts.models import Contact


def contact_payload(contact: Contact) -> dict:
    return {
        "id": contact.id,
        "ownerId": contact.owner_id,
        "contactUserId": contact.contact_user_id,
        "displayName": contact.display_name,
        "contactUser": Identity.from_user(contact.contact_user).to_payload(),
    }


def publish_contact_created(contact: Contact) -> None:
    RealtimeHub.publish_on_commit(
        [contact.owner_id],
        RealtimeEvent.CONTACT_CREATED,
        contact_payload(contact),
    )


def publish_contact_updated(contact: Contact) -> None:
    RealtimeHub.publish_on_commit(
        [contact.owner_id],
        RealtimeEvent.CONTACT_UPDATED,
        contact_payload(contact),
    )


def publish_contact_deleted(owner_id, contact_id) -> None:
    RealtimeHub.publish_on_commit(
        [owner_id],
        RealtimeEvent.CONTACT_DELETED,
        {"contactId": contact_id},
    )
