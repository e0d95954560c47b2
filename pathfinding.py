"""
pathfinding.py

Grid searches shared by the map generator (reachability check and repair)
and the in-game hint system.

- neighbors(): the only definition of walkability (in bounds, not a wall)
- bfs():       FIFO frontier, visited marked on enqueue
- astar():     heap frontier ordered by f = g + manhattan, stale entries skipped

Both searches return None when the goal cannot be reached, otherwise the
full path from start to goal inclusive.
"""

from __future__ import annotations

import heapq
from collections import deque
from itertools import count
from typing import Callable, Deque, Dict, List, Optional

from models import CellKind, Grid, PathNode, Position

SearchResult = Optional[List[Position]]

# north, south, west, east
ORTHOGONAL_STEPS = ((0, -1), (0, 1), (-1, 0), (1, 0))


def manhattan(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def neighbors(grid: Grid, pos: Position, through_walls: bool = False) -> List[Position]:
    """Return the orthogonal neighbors of ``pos`` that can be stepped on.

    Args:
        grid: Grid to inspect (not modified).
        pos: Cell to expand.
        through_walls: Treat walls as walkable. Only the repair step uses this,
            to find a route worth carving.

    Returns:
        Up to four in-bounds positions, never a wall unless ``through_walls``.
    """
    result: List[Position] = []
    for dx, dy in ORTHOGONAL_STEPS:
        nxt = Position(pos.x + dx, pos.y + dy)
        if not grid.in_bounds(nxt):
            continue
        if not through_walls and grid.get(nxt) == CellKind.WALL:
            continue
        result.append(nxt)
    return result


def reconstruct_path(
    came_from: Dict[Position, Optional[Position]], goal: Position
) -> List[Position]:
    path: List[Position] = []
    cur: Optional[Position] = goal
    while cur is not None:
        path.append(cur)
        cur = came_from[cur]
    path.reverse()
    return path


def bfs(grid: Grid, start: Position, goal: Position) -> SearchResult:
    """Breadth-first search; the returned path has the fewest possible steps."""
    seq = count()
    frontier: Deque[PathNode] = deque([PathNode(0, next(seq), start)])
    came_from: Dict[Position, Optional[Position]] = {start: None}

    while frontier:
        node = frontier.popleft()
        if node.position == goal:
            return reconstruct_path(came_from, goal)
        for nxt in neighbors(grid, node.position):
            if nxt in came_from:
                continue
            came_from[nxt] = node.position
            frontier.append(PathNode(node.key + 1, next(seq), nxt))
    return None


def astar(
    grid: Grid, start: Position, goal: Position, through_walls: bool = False
) -> SearchResult:
    """A* with the Manhattan heuristic (admissible and consistent on a 4-grid).

    Equal f-scores pop in insertion order. A position may sit in the heap more
    than once; entries whose position was already expanded are skipped.
    """
    seq = count()
    g_score: Dict[Position, int] = {start: 0}
    came_from: Dict[Position, Optional[Position]] = {start: None}
    open_heap: List[PathNode] = [PathNode(manhattan(start, goal), next(seq), start)]
    closed = set()

    while open_heap:
        node = heapq.heappop(open_heap)
        current = node.position
        if current in closed:
            continue
        if current == goal:
            return reconstruct_path(came_from, goal)
        closed.add(current)

        tentative = g_score[current] + 1
        for nxt in neighbors(grid, current, through_walls=through_walls):
            if nxt in g_score and tentative >= g_score[nxt]:
                continue
            came_from[nxt] = current
            g_score[nxt] = tentative
            heapq.heappush(
                open_heap, PathNode(tentative + manhattan(nxt, goal), next(seq), nxt)
            )
    return None


SEARCHES: Dict[str, Callable[[Grid, Position, Position], SearchResult]] = {
    "bfs": bfs,
    "astar": astar,
}


def find_path(
    grid: Grid, start: Position, goal: Position, algorithm: str = "bfs"
) -> SearchResult:
    """Dispatch to a search by name ("bfs" or "astar")."""
    try:
        search = SEARCHES[algorithm]
    except KeyError:
        raise ValueError(
            f"Unknown search {algorithm!r}; expected one of {sorted(SEARCHES)}."
        ) from None
    return search(grid, start, goal)


def is_reachable(grid: Grid, start: Position, goal: Position) -> bool:
    return bfs(grid, start, goal) is not None
