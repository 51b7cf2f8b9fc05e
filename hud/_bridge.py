"""Host bridge: message passing between the HUD and the game client."""

from typing import Any, Callable, Optional, Protocol

EVENT_UPDATE_DATA = "wave_hud:updateData"
EVENT_REQUEST_DATA = "wave_hud:requestData"
EVENT_READY = "wave_hud:ready"

EventHandler = Callable[[Any], None]


class HostBridge(Protocol):
    """Event channel to the host application."""

    def on_event(self, name: str, handler: EventHandler) -> None: ...

    def emit(self, name: str, payload: Optional[Any] = None) -> None: ...


class NullBridge:
    """Bridge used when no host is present. Every call is a no-op."""

    def on_event(self, name: str, handler: EventHandler) -> None:
        pass

    def emit(self, name: str, payload: Optional[Any] = None) -> None:
        pass
