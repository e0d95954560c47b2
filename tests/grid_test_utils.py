from models import CellKind, Grid, Position


def make_grid(size, walls=(), treasures=(), player=(0, 0)):
    """Hand-build a grid from coordinate lists."""
    grid = Grid.empty(size)
    for x, y in walls:
        grid.set(Position(x, y), CellKind.WALL)
    for x, y in treasures:
        grid.set(Position(x, y), CellKind.TREASURE)
    if player is not None:
        grid.set(Position(*player), CellKind.PLAYER)
    return grid


def assert_valid_path(grid, path, start, goal):
    assert path[0] == start
    assert path[-1] == goal
    for a, b in zip(path, path[1:]):
        assert abs(a.x - b.x) + abs(a.y - b.y) == 1
    for p in path[1:-1]:
        assert grid.get(p) != CellKind.WALL
