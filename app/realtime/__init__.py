"""
Realtime fan-out.

Pushes named events to connected WebSocket clients over the Channels
channel layer. Each authenticated connection joins the group of its own
identity; services publish to identities and never to connections.

Modules:
    hub: RealtimeHub publish API used by services
    groups: Channel-layer group naming
    middleware: JWT handshake authentication
    consumers: WebSocket consumer
    routing: WebSocket URL patterns
"""
