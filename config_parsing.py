from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict

from models import GameConfig, GeneratorConfig, Palette
from utils import as_color, as_section


def _int_setting(raw: Dict[str, Any], key: str, default: int, minimum: int = 0) -> int:
    """Read an integer setting, rejecting garbage and values below ``minimum``."""
    value = raw.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer, got {value!r}") from None
    if parsed < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {parsed}")
    return parsed


def _bool_setting(raw: Dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def _fraction_setting(raw: Dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key, default)
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {value!r}") from None
    if not 0.0 <= parsed <= 1.0:
        raise ValueError(f"{key} must be within [0, 1], got {parsed}")
    return parsed


def parse_generator_config(cfg: Dict[str, Any]) -> GeneratorConfig:
    """Parse the ``generator`` section of the config.

    Args:
        cfg: Whole config dict (the section itself is optional).

    Returns:
        GeneratorConfig with defaults applied.

    Raises:
        ValueError: If a value is malformed or the obstacle range is inverted.
    """
    raw = as_section(cfg, "generator")
    d = GeneratorConfig()
    min_obstacles = _int_setting(raw, "min_obstacles", d.min_obstacles)
    max_obstacles = _int_setting(raw, "max_obstacles", d.max_obstacles)
    if min_obstacles > max_obstacles:
        raise ValueError(
            f"min_obstacles ({min_obstacles}) exceeds max_obstacles ({max_obstacles})"
        )
    prefix = str(raw.get("map_prefix", d.map_prefix)).strip() or d.map_prefix
    return GeneratorConfig(
        size=_int_setting(raw, "size", d.size, minimum=4),
        min_obstacles=min_obstacles,
        max_obstacles=max_obstacles,
        treasures=_int_setting(raw, "treasures", d.treasures),
        maze_share=_fraction_setting(raw, "maze_share", d.maze_share),
        scatter_share=_fraction_setting(raw, "scatter_share", d.scatter_share),
        cluster_share=_fraction_setting(raw, "cluster_share", d.cluster_share),
        cluster_density=_fraction_setting(raw, "cluster_density", d.cluster_density),
        scatter_attempts=_int_setting(raw, "scatter_attempts", d.scatter_attempts, minimum=1),
        max_maps=_int_setting(raw, "max_maps", d.max_maps, minimum=1),
        map_prefix=prefix,
    )


def parse_palette(cfg: Dict[str, Any]) -> Palette:
    """Parse the ``colors`` section; unknown keys are ignored."""
    raw = as_section(cfg, "colors")
    d = Palette()
    colors = {f.name: as_color(raw.get(f.name), getattr(d, f.name)) for f in fields(Palette)}
    return Palette(**colors)


def parse_game_config(cfg: Dict[str, Any]) -> GameConfig:
    """Parse the ``game`` section (plus ``colors``) of the config.

    Raises:
        ValueError: If a numeric rule is malformed or negative, or a flag is not a boolean.
    """
    raw = as_section(cfg, "game")
    d = GameConfig()
    title_raw = raw.get("title")
    title = title_raw.strip() if isinstance(title_raw, str) and title_raw.strip() else d.title
    return GameConfig(
        cell_size=_int_setting(raw, "cell_size", d.cell_size, minimum=4),
        starting_score=_int_setting(raw, "starting_score", d.starting_score),
        hint_cost=_int_setting(raw, "hint_cost", d.hint_cost),
        wall_penalty=_int_setting(raw, "wall_penalty", d.wall_penalty),
        move_cost=_int_setting(raw, "move_cost", d.move_cost),
        fog_of_war=_bool_setting(raw, "fog_of_war", d.fog_of_war),
        maps_dir=str(raw.get("maps_dir", d.maps_dir)),
        title=title,
        palette=parse_palette(cfg),
    )
