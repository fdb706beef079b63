"""
Identity directory service.

This module exposes the read-only identity lookups the messaging core
depends on. Contacts and messaging never query the User table directly
for identity resolution; they go through IdentityDirectory.

Related files:
    - models.py: User model backing the directory
    - contacts/services.py: Resolves contact targets by name or email
    - messaging/services.py: Resolves message receivers and chat partners

Lookup Rules:
    - resolve(): by primary key, active users only
    - find_by_name_or_email(): email is matched case-insensitively and is
      the primary disambiguator; name is matched exactly. When the supplied
      name and email point at different users the query is ambiguous and is
      rejected instead of silently picking one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db.models import Q

from core.exceptions import NotFoundError, ValidationError
from core.services import BaseService

if TYPE_CHECKING:
    from authentication.models import User


@dataclass(frozen=True)
class Identity:
    """Public view of a registered user."""

    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> Identity:
        return cls(id=user.id, name=user.name, email=user.email)

    def to_payload(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}


class IdentityDirectory(BaseService):
    """
    Read-only identity lookups.

    Methods:
        get_user: Fetch the active User row for an id
        resolve: Identity {id, name, email} for an id
        find_user_by_name_or_email: User row matching a name/email query
        find_by_name_or_email: Identity matching a name/email query
    """

    @classmethod
    def get_user(cls, user_id) -> User:
        """
        Fetch an active user by id.

        Raises:
            NotFoundError: No active user with this id (error_code USER_NOT_FOUND)
        """
        from authentication.models import User

        user = User.objects.filter(pk=user_id, is_active=True).first()
        if user is None:
            raise NotFoundError(
                "User not found",
                error_code="USER_NOT_FOUND",
                details={"user_id": user_id},
            )
        return user

    @classmethod
    def resolve(cls, user_id) -> Identity:
        """Resolve a user id to {id, name, email}."""
        return Identity.from_user(cls.get_user(user_id))

    @classmethod
    def find_user_by_name_or_email(
        cls,
        name: str | None = None,
        email: str | None = None,
    ) -> User:
        """
        Find the single active user matching the given name and/or email.

        Args:
            name: Exact account name
            email: Email address (case-insensitive)

        Returns:
            The matching User

        Raises:
            ValidationError: Neither name nor email supplied (NAME_OR_EMAIL_REQUIRED),
                or the query matches more than one user (AMBIGUOUS_IDENTITY)
            NotFoundError: Nothing matches (USER_NOT_FOUND)
        """
        from authentication.models import User

        name = name.strip() if name else ""
        email = email.strip() if email else ""

        if not name and not email:
            raise ValidationError(
                "Provide a name or an email to look up a user",
                error_code="NAME_OR_EMAIL_REQUIRED",
            )

        query = Q()
        if email:
            query |= Q(email__iexact=email)
        if name:
            query |= Q(name=name)

        # Two rows are enough to detect ambiguity
        matches = list(User.objects.filter(query, is_active=True).order_by("pk")[:2])

        if not matches:
            raise NotFoundError(
                "User not found",
                error_code="USER_NOT_FOUND",
                details={"name": name, "email": email},
            )

        if len(matches) > 1:
            cls.get_logger().warning(
                f"Ambiguous identity lookup name={name!r} email={email!r} "
                f"matched users {[u.id for u in matches]}"
            )
            raise ValidationError(
                "Name and email match different users; provide the email only",
                error_code="AMBIGUOUS_IDENTITY",
                details={"name": name, "email": email},
            )

        return matches[0]

    @classmethod
    def find_by_name_or_email(
        cls,
        name: str | None = None,
        email: str | None = None,
    ) -> Identity:
        """Identity for find_user_by_name_or_email()."""
        return Identity.from_user(cls.find_user_by_name_or_email(name=name, email=email))
