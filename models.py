from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Sequence

from game_types import Color


class CellKind(IntEnum):
    """Semantic role of a grid cell; the value is its digit in map files."""

    EMPTY = 0
    WALL = 1
    TREASURE = 2
    PLAYER = 3


_KIND_BY_DIGIT = {str(int(kind)): kind for kind in CellKind}


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True, order=True)
class PathNode:
    """Frontier entry shared by the searches.

    Ordered by ``key`` (depth for BFS, f-score for A*), then by ``seq`` so
    equal keys come out in insertion order.
    """

    key: int
    seq: int
    position: Position = field(compare=False)


@dataclass
class Grid:
    """Square cell container. Cells are stored row-major: ``cells[y][x]``."""

    size: int
    cells: List[List[CellKind]]
    visible: List[List[bool]]

    @classmethod
    def empty(cls, size: int) -> "Grid":
        return cls(
            size=size,
            cells=[[CellKind.EMPTY for _ in range(size)] for _ in range(size)],
            visible=[[False for _ in range(size)] for _ in range(size)],
        )

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Build a grid from digit rows (row index = y, char index = x).

        Raises:
            ValueError: If the rows are not square or contain a non cell digit.
        """
        size = len(rows)
        if size == 0:
            raise ValueError("Grid has no rows.")
        grid = cls.empty(size)
        for y, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(
                    f"Row {y} has {len(row)} cells, expected {size}."
                )
            for x, ch in enumerate(row):
                kind = _KIND_BY_DIGIT.get(ch)
                if kind is None:
                    raise ValueError(f"Invalid cell {ch!r} at ({x}, {y}).")
                grid.cells[y][x] = kind
        return grid

    def rows(self) -> List[str]:
        return ["".join(str(int(kind)) for kind in row) for row in self.cells]

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def get(self, pos: Position) -> CellKind:
        return self.cells[pos.y][pos.x]

    def set(self, pos: Position, kind: CellKind) -> None:
        self.cells[pos.y][pos.x] = kind

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def positions_of(self, kind: CellKind) -> List[Position]:
        return [p for p in self.positions() if self.get(p) == kind]

    def count(self, kind: CellKind) -> int:
        return sum(row.count(kind) for row in self.cells)

    def player_position(self) -> Position:
        """Return the unique Player cell.

        Raises:
            ValueError: If the grid does not hold exactly one Player.
        """
        found = self.positions_of(CellKind.PLAYER)
        if len(found) != 1:
            raise ValueError(f"Expected exactly one player cell, found {len(found)}.")
        return found[0]

    def is_visible(self, pos: Position) -> bool:
        return self.visible[pos.y][pos.x]

    def reveal(self, pos: Position) -> None:
        self.visible[pos.y][pos.x] = True

    def reveal_all(self) -> None:
        for row in self.visible:
            row[:] = [True] * self.size

    def copy(self) -> "Grid":
        return Grid(
            size=self.size,
            cells=[list(row) for row in self.cells],
            visible=[list(row) for row in self.visible],
        )


@dataclass(frozen=True)
class GeneratorConfig:
    size: int = 20
    min_obstacles: int = 20
    max_obstacles: int = 30
    treasures: int = 3
    maze_share: float = 0.1
    scatter_share: float = 0.8
    cluster_share: float = 0.1
    cluster_density: float = 0.7
    scatter_attempts: int = 400
    max_maps: int = 1000
    map_prefix: str = "map"


@dataclass(frozen=True)
class Palette:
    background: Color = (40, 40, 48)
    hidden: Color = (255, 255, 255)
    empty: Color = (255, 255, 255)
    wall: Color = (0, 0, 0)
    treasure: Color = (255, 215, 0)
    hint: Color = (0, 200, 0)
    player: Color = (0, 0, 255)
    grid_line: Color = (128, 128, 128)
    text: Color = (255, 255, 255)


@dataclass(frozen=True)
class GameConfig:
    cell_size: int = 30
    starting_score: int = 100
    hint_cost: int = 3
    wall_penalty: int = 10
    move_cost: int = 1
    fog_of_war: bool = True
    maps_dir: str = "."
    title: str = "Treasure Hunt"
    palette: Palette = field(default_factory=Palette)
