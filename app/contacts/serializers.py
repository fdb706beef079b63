"""
Serializers for the contacts API.

Serializers:
    ContactSerializer: Contact output with the target user nested
    ContactCreateSerializer: Request body for creating a contact
    ContactUpdateSerializer: Request body for renaming a contact
"""

from rest_framework import serializers

from authentication.serializers import UserSerializer
from contacts.models import Contact


class ContactSerializer(serializers.ModelSerializer):
    """Serializer for Contact output."""

    owner_id = serializers.IntegerField(read_only=True)
    contact_user_id = serializers.IntegerField(read_only=True)
    contact_user = UserSerializer(read_only=True)

    class Meta:
        model = Contact
        fields = [
            "id",
            "owner_id",
            "contact_user_id",
            "display_name",
            "contact_user",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ContactCreateSerializer(serializers.Serializer):
    """
    Request body for creating a contact.

    The target is given by contact_user_id, or by email and/or name.
    """

    display_name = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        help_text="Custom name for the contact (1-100 characters)",
    )
    contact_user_id = serializers.IntegerField(required=False)
    email = serializers.EmailField(required=False)
    name = serializers.CharField(required=False)

    def validate(self, attrs):
        if not any(attrs.get(key) for key in ("contact_user_id", "email", "name")):
            raise serializers.ValidationError(
                "Provide contact_user_id, email or name."
            )
        return attrs


class ContactUpdateSerializer(serializers.Serializer):
    """Request body for renaming a contact."""

    display_name = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        help_text="New display name (1-100 characters)",
    )
