"""Player stats HUD driven by a host application bridge."""

from hud._bridge import (
    EVENT_READY,
    EVENT_REQUEST_DATA,
    EVENT_UPDATE_DATA,
    HostBridge,
    NullBridge,
)
from hud._client import POLL_INTERVAL, HudClient
from hud._format import bar_state, format_group, format_money, format_player_id
from hud._render import ElementRenderTarget, RenderTarget, render
from hud._snapshot import HudSnapshot, merge_update

__all__ = [
    # _snapshot
    "HudSnapshot",
    "merge_update",
    # _format
    "format_player_id",
    "format_money",
    "format_group",
    "bar_state",
    # _render
    "RenderTarget",
    "ElementRenderTarget",
    "render",
    # _bridge
    "HostBridge",
    "NullBridge",
    "EVENT_UPDATE_DATA",
    "EVENT_REQUEST_DATA",
    "EVENT_READY",
    # _client
    "HudClient",
    "POLL_INTERVAL",
]
