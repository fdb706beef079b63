"""
WebSocket authentication middleware.

Provides JWT authentication for WebSocket connections.
Supports token via query string, subprotocol, or cookie.

Related files:
    - routing.py: WebSocket URL patterns
    - consumers.py: WebSocket handlers
    - config/asgi.py: ASGI configuration

Token Passing Methods (in order of precedence):
    1. Query string: ws://host/ws/realtime/?token=<jwt_token>
    2. Subprotocol: Sec-WebSocket-Protocol: jwt, <jwt_token>
    3. Cookie: token=<jwt_token>

Usage in config/asgi.py:
    from realtime.middleware import JWTAuthMiddleware

    application = ProtocolTypeRouter({
        "websocket": JWTAuthMiddleware(
            URLRouter(websocket_urlpatterns)
        ),
    })
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.http.cookie import parse_cookie
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken

from realtime.constants import REALTIME_CONFIG

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseMiddleware):
    """
    JWT authentication middleware for WebSocket connections.

    Extracts a simplejwt access token from the handshake, validates it,
    and attaches the user to scope["user"]. Connections without a valid
    token get AnonymousUser; the consumer decides how to reject them.

    Also sets scope["token_source"] to "query", "subprotocol", "cookie"
    or None so the consumer can echo the "jwt" subprotocol back.

    Usage:
        # Client connection with query string
        ws = new WebSocket("ws://host/ws/realtime/?token=eyJ...")

        # Client connection with subprotocol
        ws = new WebSocket("ws://host/ws/realtime/", ["jwt", "eyJ..."])
    """

    async def __call__(self, scope, receive, send):
        """
        Process WebSocket connection.

        Authenticates user and adds to scope before
        passing to inner application.
        """
        scope = dict(scope)
        token, source = self._get_token(scope)

        if token:
            scope["user"] = await self._get_user_from_token(token)
        else:
            scope["user"] = AnonymousUser()
        scope["token_source"] = source

        return await super().__call__(scope, receive, send)

    def _get_token(self, scope) -> tuple[str | None, str | None]:
        token = self._get_token_from_query(scope)
        if token:
            return token, "query"

        token = self._get_token_from_subprotocol(scope)
        if token:
            return token, "subprotocol"

        token = self._get_token_from_cookie(scope)
        if token:
            return token, "cookie"

        return None, None

    def _get_token_from_query(self, scope) -> str | None:
        """Extract token from query string."""
        query_string = scope.get("query_string", b"").decode()
        params = parse_qs(query_string)
        token_list = params.get(REALTIME_CONFIG.TOKEN_QUERY_PARAM, [])

        return token_list[0] if token_list else None

    def _get_token_from_subprotocol(self, scope) -> str | None:
        """
        Extract token from WebSocket subprotocol.

        Expects: Sec-WebSocket-Protocol: jwt, <token>
        """
        subprotocols = scope.get("subprotocols", [])

        if len(subprotocols) >= 2 and subprotocols[0] == REALTIME_CONFIG.TOKEN_SUBPROTOCOL:
            return subprotocols[1]

        return None

    def _get_token_from_cookie(self, scope) -> str | None:
        """Extract token from the Cookie header."""
        for name, value in scope.get("headers", []):
            if name == b"cookie":
                cookies = parse_cookie(value.decode("latin1"))
                return cookies.get(REALTIME_CONFIG.TOKEN_COOKIE_NAME) or None

        return None

    @database_sync_to_async
    def _get_user_from_token(self, token: str):
        """
        Validate JWT token and get user.

        Args:
            token: JWT access token

        Returns:
            User instance if valid, AnonymousUser otherwise
        """
        User = get_user_model()

        try:
            access_token = AccessToken(token)
            user_id = access_token[jwt_settings.USER_ID_CLAIM]
            user = User.objects.get(**{jwt_settings.USER_ID_FIELD: user_id})
        except TokenError as e:
            logger.warning(f"Invalid JWT token on WebSocket handshake: {e}")
            return AnonymousUser()
        except KeyError:
            logger.warning("JWT token on WebSocket handshake has no user claim")
            return AnonymousUser()
        except User.DoesNotExist:
            logger.warning("User not found for WebSocket token")
            return AnonymousUser()

        if not user.is_active:
            logger.warning(f"Inactive user attempted WebSocket connection: {user.id}")
            return AnonymousUser()

        return user
