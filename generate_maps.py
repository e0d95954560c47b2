#!/usr/bin/env python3
"""
generate_maps.py

Generates random Treasure Hunt maps.

Per generated map k:
- Writes:   <maps-dir>/map{k}.json   (first unused k in 1..max_maps)

Key properties:
- Square grid (default 20x20), player fixed at (0,0)
- Obstacle budget drawn from [min_obstacles, max_obstacles], split into
  maze L-shapes (10%), scattered single walls (80%) and 3x3 clusters (10%)
- Treasures only in the lower-right quadrant
- Every treasure reachable from the player: unreachable placements are
  repaired by clearing the walls on one shortest wall-blind route
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from config_io import load_optional_config
from config_parsing import parse_generator_config
from map_io import MapSaturationError, next_map_path, write_map
from models import CellKind, GeneratorConfig, Grid, Position
from pathfinding import astar, is_reachable

logger = logging.getLogger(__name__)

ORIGIN = Position(0, 0)


@dataclass
class GenerationStats:
    obstacle_budget: int = 0
    maze_shapes: int = 0
    scattered_walls: int = 0
    clusters: int = 0
    walls_total: int = 0
    treasures_placed: int = 0
    repairs: int = 0
    cells_cleared: int = 0


# ----------------------------
# Repair
# ----------------------------


def repair(grid: Grid, start: Position, goal: Position) -> List[Position]:
    """Make ``goal`` reachable from ``start`` by clearing walls in place.

    Finds one shortest route that may cross walls and turns every wall on it
    into an empty cell. Only walls change; the route's endpoints keep their kind.

    Returns:
        The positions that were cleared, in route order.
    """
    route = astar(grid, start, goal, through_walls=True)
    if route is None:
        return []
    cleared = [p for p in route if grid.get(p) == CellKind.WALL]
    for p in cleared:
        grid.set(p, CellKind.EMPTY)
    return cleared


# ----------------------------
# Wall painters
# ----------------------------


class MazeWallPainter:
    """Stamps L-shaped triominoes at interior anchors (overlaps allowed)."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def paint(self, grid: Grid, count: int) -> int:
        n = grid.size
        for _ in range(count):
            x = self.rng.randint(1, n - 2)
            y = self.rng.randint(1, n - 2)
            if self.rng.random() < 0.5:
                cells = ((x, y), (x + 1, y), (x, y + 1))
            else:
                cells = ((x, y), (x - 1, y), (x, y - 1))
            for cx, cy in cells:
                grid.set(Position(cx, cy), CellKind.WALL)
        return count


class ScatterWallPainter:
    """Places single walls on random empty cells, never on the origin."""

    def __init__(self, rng: random.Random, max_attempts: int) -> None:
        self.rng = rng
        self.max_attempts = max_attempts

    def paint(self, grid: Grid, count: int) -> int:
        placed = 0
        for _ in range(count):
            pos = self._pick_empty(grid)
            if pos is None:
                logger.warning("no empty cell left for scattered walls (%d/%d)", placed, count)
                break
            grid.set(pos, CellKind.WALL)
            placed += 1
        return placed

    def _pick_empty(self, grid: Grid) -> Optional[Position]:
        n = grid.size
        for _ in range(self.max_attempts):
            pos = Position(self.rng.randrange(n), self.rng.randrange(n))
            if pos != ORIGIN and grid.get(pos) == CellKind.EMPTY:
                return pos
        # resampling budget spent: choose directly among what is left
        pool = [p for p in grid.positions_of(CellKind.EMPTY) if p != ORIGIN]
        return self.rng.choice(pool) if pool else None


class ClusterWallPainter:
    """Fills random 3x3 neighbourhoods with walls at a fixed density."""

    def __init__(self, rng: random.Random, density: float) -> None:
        self.rng = rng
        self.density = density

    def paint(self, grid: Grid, count: int) -> int:
        n = grid.size
        for _ in range(count):
            cx = self.rng.randint(1, n - 3)
            cy = self.rng.randint(1, n - 3)
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if self.rng.random() >= self.density:
                        continue
                    pos = Position(cx + dx, cy + dy)
                    if grid.in_bounds(pos) and grid.get(pos) == CellKind.EMPTY:
                        grid.set(pos, CellKind.WALL)
        return count


# ----------------------------
# Treasures
# ----------------------------


class TreasurePlacer:
    """Places treasures in the far quadrant, repairing unreachable ones."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def place(self, grid: Grid, count: int, stats: GenerationStats) -> int:
        half = grid.size // 2
        candidates = [
            p for p in grid.positions_of(CellKind.EMPTY) if p.x >= half and p.y >= half
        ]
        self.rng.shuffle(candidates)

        placed = 0
        for spot in candidates:
            if placed >= count:
                break
            grid.set(spot, CellKind.TREASURE)
            if not is_reachable(grid, ORIGIN, spot):
                cleared = repair(grid, ORIGIN, spot)
                stats.repairs += 1
                stats.cells_cleared += len(cleared)
                logger.debug("repaired route to %s, cleared %s", spot, cleared)
            placed += 1
        if placed < count:
            logger.warning("only %d of %d treasures placed", placed, count)
        return placed


# ----------------------------
# Generator orchestration
# ----------------------------


class MapGenerator:
    def __init__(self, config: GeneratorConfig, rng: random.Random) -> None:
        self.config = config
        self.rng = rng

        self.maze = MazeWallPainter(rng)
        self.scatter = ScatterWallPainter(rng, config.scatter_attempts)
        self.clusters = ClusterWallPainter(rng, config.cluster_density)
        self.treasures = TreasurePlacer(rng)
        self.last_stats: Optional[GenerationStats] = None

    def generate_grid(self) -> Grid:
        cfg = self.config
        stats = GenerationStats()
        grid = Grid.empty(cfg.size)
        grid.set(ORIGIN, CellKind.PLAYER)

        # each share is truncated on its own; the parts need not add up
        total = self.rng.randint(cfg.min_obstacles, cfg.max_obstacles)
        stats.obstacle_budget = total
        stats.maze_shapes = self.maze.paint(grid, int(total * cfg.maze_share))
        stats.scattered_walls = self.scatter.paint(grid, int(total * cfg.scatter_share))
        stats.clusters = self.clusters.paint(grid, int(total * cfg.cluster_share))

        stats.treasures_placed = self.treasures.place(grid, cfg.treasures, stats)
        stats.walls_total = grid.count(CellKind.WALL)

        self.last_stats = stats
        logger.debug("generated grid: %s", stats)
        return grid

    def generate_file(self, maps_dir: Path) -> Path:
        """Generate one map into the next free ``map<k>.json``.

        Raises:
            MapSaturationError: If every filename slot is taken (nothing is written).
        """
        path = next_map_path(maps_dir, self.config.map_prefix, self.config.max_maps)
        grid = self.generate_grid()
        write_map(path, grid, self.config.treasures)
        return path


def generate_next_map(
    maps_dir: Path,
    config: Optional[GeneratorConfig] = None,
    rng: Optional[random.Random] = None,
) -> Path:
    """Convenience wrapper used by the game when no map exists yet."""
    generator = MapGenerator(config or GeneratorConfig(), rng or random.Random())
    return generator.generate_file(maps_dir)


# ----------------------------
# CLI
# ----------------------------


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate Treasure Hunt maps.")
    p.add_argument(
        "count",
        type=int,
        nargs="?",
        default=1,
        help="How many new maps to generate (default: 1).",
    )
    p.add_argument(
        "--maps-dir",
        type=str,
        default=".",
        help="Folder that holds the map files (default: current directory)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation.",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional config.json with a 'generator' section.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.count <= 0:
        raise SystemExit("count must be > 0")

    cfg = load_optional_config(Path(args.config) if args.config else None)
    try:
        config = parse_generator_config(cfg)
    except ValueError as e:
        raise SystemExit(f"Invalid generator config: {e}")

    generator = MapGenerator(config, random.Random(args.seed))
    maps_dir = Path(args.maps_dir)
    for _ in range(args.count):
        try:
            path = generator.generate_file(maps_dir)
        except MapSaturationError as e:
            raise SystemExit(str(e))
        stats = generator.last_stats
        print(
            f"Successfully created {path} | walls={stats.walls_total} "
            f"treasures={stats.treasures_placed} repairs={stats.repairs}"
        )


if __name__ == "__main__":
    main()
