"""
Authentication views.

This module provides API views for:
- The current identity (/me)
- Identity lookup by email
- Account registration
- Token obtain with the realtime token cookie

Related files:
    - serializers.py: Request/response serialization
    - services.py: IdentityDirectory lookups
    - urls.py: URL routing

Note:
    Credential issuance is handled by djangorestframework-simplejwt:
    - Obtain token pair: /api/v1/auth/token/ (CookieTokenObtainPairView)
    - Refresh access token: /api/v1/auth/token/refresh/
"""

import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from authentication.serializers import (
    RegisterSerializer,
    UserSearchSerializer,
    UserSerializer,
)
from authentication.services import IdentityDirectory
from realtime.constants import REALTIME_CONFIG

logger = logging.getLogger(__name__)


class MeView(APIView):
    """
    API view for the authenticated identity.

    GET: Return {id, name, email} of the caller

    URL: /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user",
        responses={200: UserSerializer},
        tags=["Auth"],
    )
    def get(self, request):
        """Return the caller's identity."""
        return Response(UserSerializer(request.user).data)


class UserSearchView(APIView):
    """
    API view for looking up a user by email.

    GET: Return {id, name, email} of the user with the given email

    URL: /api/v1/auth/users/search/?email=<email>

    Used by clients before creating a contact or starting a conversation.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Find user by email",
        parameters=[
            OpenApiParameter(
                name="email",
                type=str,
                required=True,
                description="Email address to look up",
            ),
        ],
        responses={
            200: UserSerializer,
            400: OpenApiResponse(description="Missing or invalid email"),
            404: OpenApiResponse(description="No user with this email"),
        },
        tags=["Auth"],
    )
    def get(self, request):
        """Look up a user by email."""
        serializer = UserSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        user = IdentityDirectory.find_user_by_name_or_email(
            email=serializer.validated_data["email"],
        )

        return Response(UserSerializer(user).data)


class RegisterView(APIView):
    """
    API view for creating an account.

    POST: Register {name, email, password} and return {id, name, email}

    URL: /api/v1/auth/register/

    Registration does not sign the user in; clients obtain a token pair
    from /api/v1/auth/token/ afterwards.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register",
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Invalid or already used fields"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        """Create a new user."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Registered user {user.id}")

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class CookieTokenObtainPairView(TokenObtainPairView):
    """
    simplejwt token obtain that also sets the access token as a cookie.

    The body is unchanged ({access, refresh}). The httpOnly cookie lets
    browsers authenticate the realtime WebSocket handshake, which cannot
    carry an Authorization header.

    URL: /api/v1/auth/token/
    """

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)

        access = response.data.get("access")
        if response.status_code == status.HTTP_200_OK and access:
            response.set_cookie(
                REALTIME_CONFIG.TOKEN_COOKIE_NAME,
                access,
                max_age=int(settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds()),
                httponly=True,
                secure=not settings.DEBUG,
                samesite="Lax",
            )
        return response
