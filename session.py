from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Set

from models import CellKind, GameConfig, Grid, Position
from pathfinding import find_path, manhattan

logger = logging.getLogger(__name__)


class MoveOutcome(Enum):
    BOUNDARY = "boundary"
    WALL = "wall"
    MOVED = "moved"
    TREASURE = "treasure"
    WON = "won"


class HintOutcome(Enum):
    NO_POINTS = "no_points"
    NO_TREASURE = "no_treasure"
    NO_PATH = "no_path"
    SHOWN = "shown"


class GameSession:
    """Rules of one play-through over a loaded grid (no rendering, no input).

    The grid is mutated in place as the player moves. Hint markers live in
    ``hint_cells`` rather than in the grid, so the grid keeps only the four
    map cell kinds.
    """

    def __init__(
        self,
        grid: Grid,
        config: Optional[GameConfig] = None,
        treasures_total: Optional[int] = None,
    ) -> None:
        self.grid = grid
        self.config = config or GameConfig()
        self.player = grid.player_position()
        self.score: int = self.config.starting_score
        self.treasures_found: int = 0
        self.treasures_total: int = (
            treasures_total if treasures_total is not None else grid.count(CellKind.TREASURE)
        )
        self.hint_cells: Set[Position] = set()
        self.won = False

        if not self.config.fog_of_war:
            grid.reveal_all()
        grid.reveal(self.player)

    # ----------------------------
    # Movement
    # ----------------------------

    def move(self, dx: int, dy: int) -> MoveOutcome:
        """Try to move the player one cell by (dx, dy)."""
        if self.won:
            return MoveOutcome.WON

        target = Position(self.player.x + dx, self.player.y + dy)
        if not self.grid.in_bounds(target):
            return MoveOutcome.BOUNDARY

        if self.grid.get(target) == CellKind.WALL:
            self.grid.reveal(target)
            self.score -= self.config.wall_penalty
            return MoveOutcome.WALL

        collected = self.grid.get(target) == CellKind.TREASURE
        self.grid.set(self.player, CellKind.EMPTY)
        self.grid.set(target, CellKind.PLAYER)
        self.grid.reveal(target)
        self.player = target
        self.hint_cells.clear()

        if collected:
            self.treasures_found += 1
            logger.info("treasure %d/%d found at %s", self.treasures_found, self.treasures_total, target)
            if self.treasures_found >= self.treasures_total:
                # no move cost on the winning step
                self.won = True
                return MoveOutcome.WON
        self.score -= self.config.move_cost
        return MoveOutcome.TREASURE if collected else MoveOutcome.MOVED

    # ----------------------------
    # Hints
    # ----------------------------

    def nearest_treasure(self) -> Optional[Position]:
        """Manhattan-nearest remaining treasure; smallest (x, y) breaks ties."""
        treasures = sorted(self.grid.positions_of(CellKind.TREASURE))
        if not treasures:
            return None
        return min(treasures, key=lambda t: manhattan(self.player, t))

    def hint(self, algorithm: str = "bfs") -> HintOutcome:
        """Buy a hint: reveal the next step towards the nearest treasure."""
        if self.score < self.config.hint_cost:
            return HintOutcome.NO_POINTS
        target = self.nearest_treasure()
        if target is None:
            return HintOutcome.NO_TREASURE

        self.hint_cells.clear()
        path = find_path(self.grid, self.player, target, algorithm)
        if path is None or len(path) < 2:
            logger.debug("no %s path from %s to %s", algorithm, self.player, target)
            return HintOutcome.NO_PATH

        step = path[1]
        self.hint_cells.add(step)
        self.grid.reveal(step)
        self.score -= self.config.hint_cost
        return HintOutcome.SHOWN
