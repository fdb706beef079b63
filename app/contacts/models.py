"""
Contact registry models.

Models:
    Contact: An owner's entry for another user, with a custom display name

Design Decisions:
    - Contacts belong to their owner only; the target user never sees them
    - The same user may be a contact of many owners under different names
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from contacts.constants import CONTACT_CONFIG
from core.models import BaseModel


class Contact(BaseModel):
    """
    A user saved in another user's contact list.

    Fields:
        owner: User who owns this entry
        contact_user: User the entry points at
        display_name: Name the owner sees for contact_user

    Constraints:
        - UniqueConstraint(owner, contact_user): One entry per pair
        - CheckConstraint(owner != contact_user): No self-contacts
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="contacts",
        help_text="User who owns this contact entry",
    )

    contact_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User this contact entry refers to",
    )

    display_name = models.CharField(
        max_length=CONTACT_CONFIG.MAX_DISPLAY_NAME_LENGTH,
        help_text="Custom name shown to the owner for this user",
    )

    class Meta:
        db_table = "contacts_contact"
        ordering = ["display_name", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["owner", "contact_user"],
                name="unique_contact_per_owner",
            ),
            models.CheckConstraint(
                condition=~Q(owner=F("contact_user")),
                name="contact_owner_not_self",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"{self.display_name} (owner {self.owner_id} -> user {self.contact_user_id})"
