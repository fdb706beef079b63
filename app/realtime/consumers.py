"""
WebSocket consumer for realtime fan-out.

Consumers:
    RealtimeConsumer: One per connection; receives identity-scoped events

Authentication:
    JWTAuthMiddleware attaches the user to self.scope["user"]. Connections
    without a valid token are accepted, sent {"type": "unauthorized"} and
    closed with code 4001 so browsers can tell a rejected handshake from a
    network failure.

Channel Groups:
    identity.<user_id>  joined automatically on connect
    aux.<name>          joined/left on client request

Message Types (from client):
    - join: {"type": "join", "channel": "<name>"}
    - leave: {"type": "leave", "channel": "<name>"}

Message Types (to client):
    - connected: {"type": "connected", "data": {"userId": <id>}}
    - unauthorized: {"type": "unauthorized"}
    - <event>: {"type": "<eventName>", "data": <payload>}
    - error: {"type": "error", "data": {"message": "..."}}
"""

from __future__ import annotations

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from realtime.constants import REALTIME_CONFIG, RealtimeEvent
from realtime.groups import aux_group, identity_group

logger = logging.getLogger(__name__)


class RealtimeConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer delivering realtime events to one connection.

    Attributes:
        identity_id: Authenticated user id (None until connected)
        joined_groups: Every channel-layer group this connection is in
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.identity_id = None
        self.joined_groups: set[str] = set()

    async def connect(self):
        """
        Handle WebSocket connection.

        On success, joins the identity group and sends "connected".
        """
        user = self.scope.get("user")

        subprotocol = None
        if self.scope.get("token_source") == "subprotocol":
            subprotocol = REALTIME_CONFIG.TOKEN_SUBPROTOCOL

        await self.accept(subprotocol=subprotocol)

        if not user or not user.is_authenticated:
            logger.warning("Rejected unauthenticated realtime connection")
            await self.send_json({"type": RealtimeEvent.UNAUTHORIZED})
            await self.close(code=REALTIME_CONFIG.UNAUTHORIZED_CLOSE_CODE)
            return

        self.identity_id = user.id
        await self._join(identity_group(user.id))

        await self.send_json(
            {
                "type": RealtimeEvent.CONNECTED,
                "data": {"userId": user.id},
            }
        )
        logger.info(f"User {user.id} connected to realtime")

    async def disconnect(self, close_code):
        """
        Handle WebSocket disconnection.

        Leaves every group joined by this connection.
        """
        for group in list(self.joined_groups):
            await self.channel_layer.group_discard(group, self.channel_name)
        self.joined_groups.clear()

        if self.identity_id is not None:
            logger.info(
                f"User {self.identity_id} disconnected from realtime (code {close_code})"
            )

    async def receive_json(self, content):
        """
        Handle incoming WebSocket frames.

        Expected message format:
            {"type": "join", "channel": "lobby"}
            {"type": "leave", "channel": "lobby"}
        """
        if self.identity_id is None:
            return

        message_type = content.get("type") if isinstance(content, dict) else None

        if message_type == "join":
            await self._handle_join(content.get("channel"))
        elif message_type == "leave":
            await self._handle_leave(content.get("channel"))
        else:
            await self._send_error(f"Unknown message type: {message_type}")

    async def _handle_join(self, channel):
        group = aux_group(channel)
        if group is None:
            await self._send_error("Invalid channel name")
            return
        await self._join(group)

    async def _handle_leave(self, channel):
        group = aux_group(channel)
        if group is None:
            await self._send_error("Invalid channel name")
            return
        if group in self.joined_groups:
            await self.channel_layer.group_discard(group, self.channel_name)
            self.joined_groups.discard(group)

    async def _join(self, group: str):
        # group_add is idempotent, so re-joining never duplicates delivery
        await self.channel_layer.group_add(group, self.channel_name)
        self.joined_groups.add(group)

    async def _send_error(self, message: str):
        await self.send_json(
            {
                "type": RealtimeEvent.ERROR,
                "data": {"message": message},
            }
        )

    async def realtime_event(self, event):
        """
        Handle realtime.event messages from the channel layer.

        Sends {"type": <eventName>, "data": <payload>} to the client.
        """
        await self.send_json(
            {
                "type": event["event"],
                "data": event["data"],
            }
        )
