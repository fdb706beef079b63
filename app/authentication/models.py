"""
Authentication models.

This module defines the identity model used by the messaging core:
- User: Custom user model with email-based authentication and a public name

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: IdentityDirectory lookups used by contacts and messaging

Security:
    - User passwords hashed with Django's configured password hashers
    - Emails are unique case-insensitively (functional unique constraint)
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.validators import MinLengthValidator
from django.db import models
from django.db.models.functions import Lower

from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    The identity directory exposes {id, name, email} of this model to the
    rest of the project; nothing outside this app writes to it.

    Fields:
        email: Primary identifier, unique, used for login
        name: Public account name (3-30 chars, unique); the fallback
            display name when a viewer has no contact entry for this user
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email="alice@example.com",
            name="alice",
            password="securepassword",
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    name = models.CharField(
        max_length=30,
        unique=True,
        validators=[MinLengthValidator(3)],
        help_text="Public account name shown when no contact name is set",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"

    # Prompted by createsuperuser in addition to USERNAME_FIELD and password
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                name="unique_user_email_ci",
            ),
        ]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        """Return the public account name."""
        return self.name

    def get_short_name(self):
        """Return the public account name."""
        return self.name
