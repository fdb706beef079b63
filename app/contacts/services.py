"""
Contact registry service layer.

Services:
    ContactService: Create, list, get, rename and remove contacts

Ownership:
    Every lookup is scoped to the owner. A contact that exists but belongs
    to someone else is reported as not found, so ids of other users'
    contacts are not confirmed.

Usage:
    from contacts.services import ContactService

    contact = ContactService.create_contact(alice, "Bobby", email="bob@example.com")
    ContactService.rename_contact(alice, contact.id, "Robert")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError
from django.db.models import QuerySet

from authentication.services import IdentityDirectory
from contacts import events
from contacts.constants import CONTACT_CONFIG
from contacts.models import Contact
from core.exceptions import DuplicateError, NotFoundError, ValidationError
from core.services import BaseService

if TYPE_CHECKING:
    from authentication.models import User


class ContactService(BaseService):
    """
    Service for contact operations.

    Methods:
        create_contact: Add a user to the owner's contacts
        list_contacts: All contacts of an owner, target user joined
        get_contact: One contact of an owner
        rename_contact: Change a contact's display name
        remove_contact: Delete a contact
    """

    @classmethod
    def _clean_display_name(cls, display_name) -> str:
        """
        Validate a display name and return it stripped.

        Error codes:
            DISPLAY_NAME_REQUIRED: Missing or blank
            DISPLAY_NAME_TOO_LONG: Longer than MAX_DISPLAY_NAME_LENGTH
        """
        display_name = display_name.strip() if isinstance(display_name, str) else ""

        if len(display_name) < CONTACT_CONFIG.MIN_DISPLAY_NAME_LENGTH:
            raise ValidationError(
                "Display name cannot be empty",
                error_code="DISPLAY_NAME_REQUIRED",
            )

        if len(display_name) > CONTACT_CONFIG.MAX_DISPLAY_NAME_LENGTH:
            raise ValidationError(
                f"Display name cannot exceed {CONTACT_CONFIG.MAX_DISPLAY_NAME_LENGTH} characters",
                error_code="DISPLAY_NAME_TOO_LONG",
                details={"max_length": CONTACT_CONFIG.MAX_DISPLAY_NAME_LENGTH},
            )

        return display_name

    @classmethod
    def _resolve_target(cls, contact_user_id=None, email=None, name=None) -> User:
        if contact_user_id is not None:
            return IdentityDirectory.get_user(contact_user_id)

        if email or name:
            return IdentityDirectory.find_user_by_name_or_email(name=name, email=email)

        raise ValidationError(
            "Provide a user id, an email or a name for the contact",
            error_code="CONTACT_TARGET_REQUIRED",
        )

    @classmethod
    def create_contact(
        cls,
        owner: User,
        display_name: str,
        *,
        contact_user_id=None,
        email: str | None = None,
        name: str | None = None,
    ) -> Contact:
        """
        Add a user to the owner's contacts.

        The target is given by id, or looked up by exact email / exact
        name through the identity directory.

        Args:
            owner: User who owns the new contact
            display_name: Custom name for the target
            contact_user_id: Target user id
            email: Target email (used when no id is given)
            name: Target account name (used when no id is given)

        Returns:
            The created Contact with contact_user loaded

        Raises:
            ValidationError: Blank/too long display name, no target given,
                target is the owner (SELF_CONTACT), or name and email
                match different users (AMBIGUOUS_IDENTITY)
            NotFoundError: Target cannot be resolved (USER_NOT_FOUND)
            DuplicateError: The owner already has this contact (CONTACT_EXISTS)
        """
        display_name = cls._clean_display_name(display_name)
        target = cls._resolve_target(contact_user_id, email=email, name=name)

        if target.id == owner.id:
            raise ValidationError(
                "You cannot add yourself as a contact",
                error_code="SELF_CONTACT",
            )

        if Contact.objects.filter(owner=owner, contact_user=target).exists():
            raise DuplicateError(
                "Contact already exists",
                error_code="CONTACT_EXISTS",
                details={"contact_user_id": target.id},
            )

        try:
            with cls.atomic():
                contact = Contact.objects.create(
                    owner=owner,
                    contact_user=target,
                    display_name=display_name,
                )
                events.publish_contact_created(contact)
        except IntegrityError:
            # Lost a race with a concurrent create for the same pair
            raise DuplicateError(
                "Contact already exists",
                error_code="CONTACT_EXISTS",
                details={"contact_user_id": target.id},
            )

        cls.get_logger().info(
            f"User {owner.id} added user {target.id} as contact {contact.id}"
        )

        return contact

    @classmethod
    def list_contacts(cls, owner: User) -> QuerySet[Contact]:
        """All contacts of owner, ordered by display name, with contact_user joined."""
        return Contact.objects.filter(owner=owner).select_related("contact_user")

    @classmethod
    def get_contact(cls, owner: User, contact_id) -> Contact:
        """
        Get one of the owner's contacts.

        Raises:
            NotFoundError: Missing or owned by someone else (CONTACT_NOT_FOUND)
        """
        return cls._get_owned(owner, contact_id)

    @classmethod
    def _get_owned(cls, owner: User, contact_id, lock: bool = False) -> Contact:
        queryset = Contact.objects.select_related("contact_user")
        if lock:
            queryset = queryset.select_for_update(of=("self",))

        try:
            return queryset.get(id=contact_id, owner=owner)
        except (Contact.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(
                "Contact not found",
                error_code="CONTACT_NOT_FOUND",
                details={"contact_id": contact_id},
            )

    @classmethod
    def rename_contact(cls, owner: User, contact_id, display_name: str) -> Contact:
        """
        Change a contact's display name. Nothing else about it changes.

        Raises:
            ValidationError: Blank or too long display name
            NotFoundError: Missing or owned by someone else (CONTACT_NOT_FOUND)
        """
        display_name = cls._clean_display_name(display_name)

        with cls.atomic():
            contact = cls._get_owned(owner, contact_id, lock=True)
            contact.display_name = display_name
            contact.save(update_fields=["display_name", "updated_at"])
            events.publish_contact_updated(contact)

        cls.get_logger().info(f"User {owner.id} renamed contact {contact.id}")

        return contact

    @classmethod
    def remove_contact(cls, owner: User, contact_id) -> None:
        """
        Delete one of the owner's contacts.

        Raises:
            NotFoundError: Missing or owned by someone else (CONTACT_NOT_FOUND)
        """
        with cls.atomic():
            contact = cls._get_owned(owner, contact_id, lock=True)
            contact_pk = contact.id
            contact.delete()
            events.publish_contact_deleted(owner.id, contact_pk)

        cls.get_logger().info(f"User {owner.id} removed contact {contact_pk}")
