"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations, public identity fields only)
- User search query parameters
- Account registration

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
"""

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Exposes the identity directory view {id, name, email} and is nested
    in contact and message responses.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
        ]
        read_only_fields = fields


class UserSearchSerializer(serializers.Serializer):
    """Query parameters for the user search endpoint."""

    email = serializers.EmailField(
        help_text="Exact email address of the user to find",
    )


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for account registration.

    Used by POST /api/v1/auth/register/. Email is unique case-insensitively
    and name is unique as stored. The password goes through Django's
    AUTH_PASSWORD_VALIDATORS.
    """

    name = serializers.CharField(
        min_length=3,
        max_length=30,
        help_text="Public account name (3-30 characters)",
    )
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Checked against the configured password validators.",
    )

    def validate_email(self, value):
        """Validate that email is not already in use."""
        email = value.strip()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_name(self, value):
        """Validate that name is not already taken."""
        name = value.strip()
        if User.objects.filter(name=name).exists():
            raise serializers.ValidationError("A user with this name already exists.")
        return name

    def validate(self, attrs):
        """Run password validators with the would-be user for similarity checks."""
        candidate = User(email=attrs["email"], name=attrs["name"])
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            name=validated_data["name"],
            password=validated_data["password"],
        )
