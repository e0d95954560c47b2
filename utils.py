from __future__ import annotations

from typing import Any, Dict

from game_types import Color


def clamp_int(v: int, lo: int, hi: int) -> int:
    """Clamp an integer value into the inclusive range [lo, hi]."""
    return lo if v < lo else hi if v > hi else v


def as_color(value: Any, default: Color) -> Color:
    """Parse a ``[r, g, b]`` list into a clamped color tuple, else ``default``."""
    if isinstance(value, (list, tuple)) and len(value) >= 3:
        try:
            return (
                clamp_int(int(value[0]), 0, 255),
                clamp_int(int(value[1]), 0, 255),
                clamp_int(int(value[2]), 0, 255),
            )
        except (TypeError, ValueError):
            return default
    return default


def as_section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return ``cfg[key]`` when it is a dict, otherwise an empty dict."""
    raw = cfg.get(key, {})
    return raw if isinstance(raw, dict) else {}


def format_elapsed(seconds: float) -> str:
    """Format a duration as ``MM:SS`` (minutes wrap at the hour like a wall clock)."""
    total = max(0, int(seconds))
    return f"{(total // 60) % 60:02d}:{total % 60:02d}"
