"""Render targets and snapshot projection."""

from typing import Any, Dict, Protocol

from hud._format import bar_state, format_group, format_money, format_player_id
from hud._snapshot import HudSnapshot

REGIONS = ("top-right", "bottom-center")
PULSE_ANIMATION = "pulse 0.5s ease-in-out infinite"


class RenderTarget(Protocol):
    """Display surface for the HUD, one method per field or bar."""

    def set_player_id(self, text: str) -> None: ...

    def set_player_name(self, text: str) -> None: ...

    def set_bank_money(self, text: str) -> None: ...

    def set_cash_money(self, text: str) -> None: ...

    def set_faction_name(self, text: str) -> None: ...

    def set_group_name(self, text: str) -> None: ...

    def set_health_bar(self, fraction: float, value: str, low: bool) -> None: ...

    def set_armor_bar(self, fraction: float, value: str, low: bool) -> None: ...

    def set_energy_bar(self, fraction: float, value: str, low: bool) -> None: ...

    def set_region_visible(self, region: str, visible: bool) -> None: ...

    def set_loading(self, active: bool) -> None: ...


class ElementRenderTarget:
    """Render target that keeps page element state in memory.

    Elements are keyed by the ids the HUD page uses (playerID, healthBar, ...).
    Each element is a dict with optional ``text``, ``style`` and ``classes``.
    """

    def __init__(self):
        self.elements: Dict[str, Dict[str, Any]] = {}

    def element(self, element_id: str) -> Dict[str, Any]:
        return self.elements.setdefault(element_id, {"text": "", "style": {}, "classes": set()})

    def text(self, element_id: str) -> str:
        return self.element(element_id)["text"]

    def _set_text(self, element_id: str, text: str) -> None:
        self.element(element_id)["text"] = text

    def set_player_id(self, text: str) -> None:
        self._set_text("playerID", text)

    def set_player_name(self, text: str) -> None:
        self._set_text("playerName", text)

    def set_bank_money(self, text: str) -> None:
        self._set_text("bankMoney", text)

    def set_cash_money(self, text: str) -> None:
        self._set_text("cashMoney", text)

    def set_faction_name(self, text: str) -> None:
        self._set_text("factionName", text)

    def set_group_name(self, text: str) -> None:
        self._set_text("groupName", text)

    def _set_bar(self, name: str, fraction: float, value: str, low: bool) -> None:
        style = self.element(f"{name}Bar")["style"]
        style["width"] = f"{fraction * 100:g}%"
        style["animation"] = PULSE_ANIMATION if low else "none"
        self._set_text(f"{name}Value", value)

    def set_health_bar(self, fraction: float, value: str, low: bool) -> None:
        self._set_bar("health", fraction, value, low)

    def set_armor_bar(self, fraction: float, value: str, low: bool) -> None:
        self._set_bar("armor", fraction, value, low)

    def set_energy_bar(self, fraction: float, value: str, low: bool) -> None:
        self._set_bar("energy", fraction, value, low)

    def set_region_visible(self, region: str, visible: bool) -> None:
        classes = self.element(f"hud-container.{region}")["classes"]
        if visible:
            classes.discard("hud-hidden")
        else:
            classes.add("hud-hidden")

    def set_loading(self, active: bool) -> None:
        classes = self.element("loadingIndicator")["classes"]
        if active:
            classes.add("active")
        else:
            classes.discard("active")

    def is_low(self, name: str) -> bool:
        return self.element(f"{name}Bar")["style"].get("animation", "none") != "none"

    def is_hidden(self, region: str) -> bool:
        return "hud-hidden" in self.element(f"hud-container.{region}")["classes"]


def render(snapshot: HudSnapshot, target: RenderTarget) -> None:
    """Project every snapshot field onto the target."""
    target.set_player_id(format_player_id(snapshot.playerID))
    target.set_player_name(snapshot.playerName)
    target.set_bank_money(format_money(snapshot.bankMoney))
    target.set_cash_money(format_money(snapshot.cashMoney))
    target.set_faction_name(snapshot.factionName)
    target.set_group_name(format_group(snapshot.groupName))

    target.set_health_bar(*bar_state(snapshot.health))
    target.set_armor_bar(*bar_state(snapshot.armor))
    target.set_energy_bar(*bar_state(snapshot.energy))
