"""HUD client: polls the host bridge and renders player stats."""

import asyncio
import logging
from typing import Any, Mapping, Optional

from hud._bridge import EVENT_READY, EVENT_REQUEST_DATA, EVENT_UPDATE_DATA, HostBridge, NullBridge
from hud._render import REGIONS, RenderTarget, render
from hud._snapshot import HudSnapshot, merge_update

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.5  # seconds


class HudClient:
    """Keeps the snapshot in sync with the host and draws it on a target.

    Args:
        target: Display surface to render onto
        bridge: Host bridge; defaults to a no-op bridge when no host is present
        poll_interval: Seconds between data requests
    """

    def __init__(
        self,
        target: RenderTarget,
        bridge: Optional[HostBridge] = None,
        poll_interval: float = POLL_INTERVAL,
    ):
        self.target = target
        self.bridge = bridge if bridge is not None else NullBridge()
        self.poll_interval = poll_interval
        self.snapshot = HudSnapshot()
        self.ready = False
        self._poll_task: Optional[asyncio.Task] = None

        on_event = getattr(self.bridge, "on_event", None)
        if callable(on_event):
            on_event(EVENT_UPDATE_DATA, self.update_data)

    def update_data(self, data: Optional[Mapping[str, Any]]) -> None:
        """Merge an update payload from the host and redraw."""
        if not data:
            return
        merge_update(self.snapshot, data)
        self.render()

    def on_data_received(self, data: Optional[Mapping[str, Any]]) -> None:
        """Called by the host when data is available; also clears the loading indicator."""
        self.update_data(data)
        self.hide_loading()

    def render(self) -> None:
        render(self.snapshot, self.target)

    def on_load(self) -> None:
        """Announce readiness to the host once, then draw the current snapshot."""
        if self.ready:
            return
        self.ready = True
        self._emit(EVENT_READY)
        logger.info("[HUD] Notified host that HUD is ready")
        self.render()

    def request_data(self) -> None:
        self._emit(EVENT_REQUEST_DATA)

    def _emit(self, name: str) -> None:
        emit = getattr(self.bridge, "emit", None)
        if not callable(emit):
            return
        try:
            emit(name)
        except (AttributeError, OSError, RuntimeError, TypeError, ValueError) as e:
            logger.warning(f"[HUD] Bridge call {name} failed: {e}")

    async def _poll_loop(self) -> None:
        while True:
            self.request_data()
            await asyncio.sleep(self.poll_interval)

    def start_polling(self) -> None:
        """Start requesting data from the host every poll_interval seconds."""
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.create_task(self._poll_loop())
            logger.info(f"[HUD] Started data polling every {self.poll_interval}s")

    async def stop_polling(self) -> None:
        if self._poll_task is None:
            return
        self._poll_task.cancel()
        try:
            await self._poll_task
        except asyncio.CancelledError:
            pass
        self._poll_task = None

    def show(self) -> None:
        for region in REGIONS:
            self.target.set_region_visible(region, True)

    def hide(self) -> None:
        for region in REGIONS:
            self.target.set_region_visible(region, False)

    def show_loading(self) -> None:
        self.target.set_loading(True)

    def hide_loading(self) -> None:
        self.target.set_loading(False)
