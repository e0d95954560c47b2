"""
map_io.py

Persisted map files. One JSON object per map:

    {"grid": ["<N digit row>", ...], "size": N, "treasures": <count>}

Row index is y, character index is x. Digits are CellKind values.
Files are named ``<prefix><k>.json`` (prefix "map" by default) for
k = 1..max_maps.
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from models import CellKind, Grid

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "map"
REQUIRED_KEYS = ("grid", "size", "treasures")


class MapFormatError(ValueError):
    """A map file could not be read or does not follow the map schema."""


class MapSaturationError(RuntimeError):
    """Every map filename slot is already taken."""


def grid_to_payload(grid: Grid, treasures: int) -> Dict[str, Any]:
    return {"grid": grid.rows(), "size": grid.size, "treasures": treasures}


def payload_to_grid(payload: Any) -> Grid:
    """Validate a decoded map object and build its grid.

    Raises:
        MapFormatError: On missing keys, size mismatch, bad rows, or a player
            count other than one.
    """
    if not isinstance(payload, dict):
        raise MapFormatError("Map must be a JSON object.")
    missing = [k for k in REQUIRED_KEYS if k not in payload]
    if missing:
        raise MapFormatError(f"Map is missing keys: {', '.join(missing)}")

    rows = payload["grid"]
    size = payload["size"]
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise MapFormatError("Map 'grid' must be a list of strings.")
    if isinstance(size, bool) or not isinstance(size, int):
        raise MapFormatError(f"Map 'size' must be an integer, got {size!r}")
    if len(rows) != size:
        raise MapFormatError(f"Map declares size {size} but has {len(rows)} rows.")

    try:
        grid = Grid.from_rows(rows)
    except ValueError as e:
        raise MapFormatError(str(e)) from e

    players = grid.count(CellKind.PLAYER)
    if players != 1:
        raise MapFormatError(f"Map must contain exactly one player, found {players}.")
    return grid


def write_map(path: Path, grid: Grid, treasures: int) -> None:
    payload = grid_to_payload(grid, treasures)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    logger.debug("wrote map %s (size=%d, treasures=%d)", path, grid.size, treasures)


def read_map(path: Path) -> Grid:
    """Read and validate one map file.

    Raises:
        MapFormatError: If the file cannot be read, is not JSON, or breaks the schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MapFormatError(f"Cannot read map {path}: {e}") from e
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MapFormatError(
            f"Map {path} is not valid JSON (line {e.lineno}, col {e.colno}): {e.msg}"
        ) from e
    try:
        return payload_to_grid(payload)
    except MapFormatError as e:
        raise MapFormatError(f"{path}: {e}") from e


def map_path(maps_dir: Path, index: int, prefix: str = DEFAULT_PREFIX) -> Path:
    return maps_dir / f"{prefix}{index}.json"


def next_map_path(maps_dir: Path, prefix: str = DEFAULT_PREFIX, max_maps: int = 1000) -> Path:
    """Return the first unused ``<prefix><k>.json`` with 1 <= k <= max_maps.

    Raises:
        MapSaturationError: If all ``max_maps`` names already exist.
    """
    for index in range(1, max_maps + 1):
        candidate = map_path(maps_dir, index, prefix)
        if not candidate.exists():
            return candidate
    raise MapSaturationError(f"Maximum map count ({max_maps}) reached in {maps_dir}")


def map_glob(prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}*.json"


def find_map_files(maps_dir: Path, prefix: str = DEFAULT_PREFIX) -> List[Path]:
    """Map files written with ``prefix``, sorted by name."""
    if not maps_dir.exists():
        return []
    return sorted(p for p in maps_dir.glob(map_glob(prefix)) if p.is_file())


def load_random_map(
    maps_dir: Path,
    rng: random.Random,
    generate: Optional[Callable[[], Path]] = None,
    prefix: str = DEFAULT_PREFIX,
) -> Grid:
    """Pick a map file uniformly at random and read it.

    Only files named ``<prefix>*.json`` count as maps. When there are none,
    ``generate`` (if given) is called once to create one and the scan is
    repeated.

    Raises:
        MapFormatError: If no map exists after the optional generation, or the
            chosen file is malformed.
    """
    files = find_map_files(maps_dir, prefix)
    if not files and generate is not None:
        logger.info("no maps in %s, generating one", maps_dir)
        generate()
        files = find_map_files(maps_dir, prefix)
    if not files:
        raise MapFormatError(f"No map files matching {map_glob(prefix)} in {maps_dir}")

    chosen = rng.choice(files)
    logger.info("loading map %s", chosen)
    return read_map(chosen)
