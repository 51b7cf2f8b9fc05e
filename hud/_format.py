"""Text formatting for HUD values."""

import math
from typing import Tuple

BAR_MAX = 100
LOW_THRESHOLD = 0.30


def format_player_id(player_id: int) -> str:
    """Zero-pad a player ID to 4 digits."""
    return str(player_id).zfill(4)


def format_money(amount: int) -> str:
    """Format currency with thousands separators, e.g. 1234567 -> $1,234,567."""
    return f"${int(amount):,}"


def format_group(group_name: str) -> str:
    return group_name.upper()


def bar_state(current: float, maximum: float = BAR_MAX) -> Tuple[float, str, bool]:
    """Compute (fraction, value label, low) for a stat bar.

    The fraction is clamped to [0, 1]. A bar is low strictly below 30%.
    """
    current = float(current)
    fraction = max(0.0, min(1.0, current / maximum))
    return fraction, str(math.floor(current)), fraction < LOW_THRESHOLD
