"""
Test configuration and fixtures for realtime tests.

This module provides:
- Users with access tokens for WebSocket handshakes
- The WebSocket application (auth middleware + router, no origin check)
- A helper that opens an authenticated connection

Usage:
    @pytest.mark.asyncio
    @pytest.mark.django_db(transaction=True)
    async def test_example(connect, alice):
        communicator = await connect(alice)
        ...
        await communicator.disconnect()
"""

import pytest
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from rest_framework_simplejwt.tokens import AccessToken

from authentication.tests.factories import UserFactory
from realtime.middleware import JWTAuthMiddleware
from realtime.routing import websocket_urlpatterns

WS_PATH = "/ws/realtime/"


@pytest.fixture
def alice(db):
    return UserFactory(name="alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    return UserFactory(name="bob", email="bob@example.com")


@pytest.fixture
def ws_application():
    """WebSocket stack as served by config.asgi, minus the origin validator."""
    return JWTAuthMiddleware(URLRouter(websocket_urlpatterns))


@pytest.fixture
def token_for():
    """Build an access token string for a user."""

    def _token(user):
        return str(AccessToken.for_user(user))

    return _token


@pytest.fixture
def connect(ws_application, token_for):
    """
    Open a connection authenticated with a query-string token and
    consume the "connected" frame.
    """

    async def _connect(user):
        communicator = WebsocketCommunicator(
            ws_application, f"{WS_PATH}?token={token_for(user)}"
        )
        connected, _ = await communicator.connect()
        assert connected
        frame = await communicator.receive_json_from()
        assert frame == {"type": "connected", "data": {"userId": user.id}}
        return communicator

    return _connect
