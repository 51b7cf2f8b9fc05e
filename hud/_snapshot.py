"""Player stats snapshot and sparse-update merging."""

from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel


class HudSnapshot(BaseModel):
    """Most recently known player stats shown on the HUD."""

    playerID: int = 0
    playerName: str = "Unknown"
    bankMoney: int = 0
    cashMoney: int = 0
    factionName: str = "None"
    groupName: str = "user"
    health: float = 100
    armor: float = 0
    energy: float = 100


# Snapshot field -> keys accepted in an update payload, in priority order.
# The game client sends the short names (id, name, faction, group).
UPDATE_KEYS: Dict[str, Tuple[str, ...]] = {
    "playerID": ("playerID", "id"),
    "playerName": ("playerName", "name"),
    "bankMoney": ("bankMoney",),
    "cashMoney": ("cashMoney",),
    "factionName": ("factionName", "faction"),
    "groupName": ("groupName", "group"),
    "health": ("health",),
    "armor": ("armor",),
    "energy": ("energy",),
}


def _pick(partial: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = partial.get(key)
        if value:
            return value
    return None


def merge_update(snapshot: HudSnapshot, partial: Optional[Mapping[str, Any]]) -> HudSnapshot:
    """Overwrite snapshot fields with the truthy values in ``partial``.

    Falsy values (0, "", None) count as absent and keep the previous value,
    so a real zero balance or zero health cannot be sent as an update.
    The snapshot is mutated in place and returned.
    """
    if not partial:
        return snapshot

    for field, keys in UPDATE_KEYS.items():
        value = _pick(partial, keys)
        if value:
            setattr(snapshot, field, value)

    return snapshot
