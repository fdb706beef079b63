"""
Channel-layer group naming.

Identity groups carry identity-scoped delivery. Auxiliary groups are
client-requested and live under a separate prefix, so no auxiliary name
can resolve to an identity group.
"""

from __future__ import annotations

import re

from realtime.constants import REALTIME_CONFIG

_AUX_NAME_RE = re.compile(r"^[A-Za-z0-9_\-.]+$")


def identity_group(identity_id) -> str:
    """Group name for the connections of one identity."""
    return f"{REALTIME_CONFIG.IDENTITY_GROUP_PREFIX}{identity_id}"


def aux_group(name: str) -> str | None:
    """
    Group name for an auxiliary channel.

    Returns None when the name is not usable as a channel-layer group
    (empty, too long, or containing characters outside [A-Za-z0-9_-.]).
    """
    if not isinstance(name, str):
        return None
    name = name.strip()
    if not name or len(name) > REALTIME_CONFIG.MAX_AUX_CHANNEL_LENGTH:
        return None
    if not _AUX_NAME_RE.match(name):
        return None
    return f"{REALTIME_CONFIG.AUX_GROUP_PREFIX}{name}"
