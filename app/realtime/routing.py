"""
WebSocket URL routing for realtime fan-out.

URL Patterns:
    ws/realtime/ - Single connection per client session

Authentication:
    JWT token passed as ?token=, as the "jwt, <token>" subprotocol pair,
    or in a "token" cookie. The cookie is set httpOnly by the token obtain
    endpoint (/api/v1/auth/token/). See middleware.py.
"""

from django.urls import path

from realtime import consumers

websocket_urlpatterns = [
    path(
        "ws/realtime/",
        consumers.RealtimeConsumer.as_asgi(),
    ),
]
