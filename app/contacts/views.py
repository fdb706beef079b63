"""
ViewSet for the contacts API.

URL Structure:
    /api/v1/contacts/          GET, POST
    /api/v1/contacts/{id}/     GET, PATCH, DELETE

All operations go through ContactService and are scoped to the caller.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from contacts.serializers import (
    ContactCreateSerializer,
    ContactSerializer,
    ContactUpdateSerializer,
)
from contacts.services import ContactService


@extend_schema_view(
    list=extend_schema(
        operation_id="list_contacts",
        summary="List contacts",
        responses={200: ContactSerializer(many=True)},
        tags=["Contacts"],
    ),
    create=extend_schema(
        operation_id="create_contact",
        summary="Create contact",
        request=ContactCreateSerializer,
        responses={
            201: ContactSerializer,
            400: OpenApiResponse(description="Invalid input or ambiguous target"),
            404: OpenApiResponse(description="Target user not found"),
            409: OpenApiResponse(description="Contact already exists"),
        },
        tags=["Contacts"],
    ),
    retrieve=extend_schema(
        operation_id="get_contact",
        summary="Get contact",
        responses={200: ContactSerializer, 404: OpenApiResponse(description="Not found")},
        tags=["Contacts"],
    ),
    partial_update=extend_schema(
        operation_id="rename_contact",
        summary="Rename contact",
        request=ContactUpdateSerializer,
        responses={200: ContactSerializer, 404: OpenApiResponse(description="Not found")},
        tags=["Contacts"],
    ),
    destroy=extend_schema(
        operation_id="delete_contact",
        summary="Delete contact",
        responses={204: OpenApiResponse(description="Deleted")},
        tags=["Contacts"],
    ),
)
class ContactViewSet(viewsets.ViewSet):
    """
    ViewSet for the caller's contacts.

    list:
        All contacts, ordered by display name.

    create:
        Add a user by id, email or name with a custom display name.

    partial_update:
        Change the display name only.
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        contacts = ContactService.list_contacts(request.user)
        return Response(ContactSerializer(contacts, many=True).data)

    def create(self, request):
        serializer = ContactCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        contact = ContactService.create_contact(
            request.user,
            data["display_name"],
            contact_user_id=data.get("contact_user_id"),
            email=data.get("email"),
            name=data.get("name"),
        )

        return Response(ContactSerializer(contact).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        contact = ContactService.get_contact(request.user, pk)
        return Response(ContactSerializer(contact).data)

    def partial_update(self, request, pk=None):
        serializer = ContactUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        contact = ContactService.rename_contact(
            request.user, pk, serializer.validated_data["display_name"]
        )

        return Response(ContactSerializer(contact).data)

    def destroy(self, request, pk=None):
        ContactService.remove_contact(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
