import pytest

from grid_test_utils import make_grid
from models import CellKind, GameConfig, Position
from session import GameSession, HintOutcome, MoveOutcome

VERTICAL_WALL = [(1, 0), (1, 1), (1, 2), (1, 3)]


@pytest.fixture
def session():
    grid = make_grid(5, walls=[(1, 0)], treasures=[(0, 2), (4, 4)])
    return GameSession(grid)


def test_new_session_state(session):
    assert session.player == Position(0, 0)
    assert session.score == 100
    assert session.treasures_total == 2
    assert session.treasures_found == 0
    assert session.grid.is_visible(Position(0, 0))
    assert not session.grid.is_visible(Position(4, 4))


def test_wall_bump_costs_points_and_reveals_wall(session):
    assert session.move(1, 0) == MoveOutcome.WALL
    assert session.player == Position(0, 0)
    assert session.score == 90
    assert session.grid.is_visible(Position(1, 0))
    assert session.grid.get(Position(1, 0)) == CellKind.WALL


def test_boundary_changes_nothing(session):
    assert session.move(-1, 0) == MoveOutcome.BOUNDARY
    assert session.move(0, -1) == MoveOutcome.BOUNDARY
    assert session.score == 100
    assert session.player == Position(0, 0)


def test_move_updates_grid_and_score(session):
    assert session.move(0, 1) == MoveOutcome.MOVED
    assert session.player == Position(0, 1)
    assert session.score == 99
    assert session.grid.get(Position(0, 0)) == CellKind.EMPTY
    assert session.grid.get(Position(0, 1)) == CellKind.PLAYER
    assert session.grid.is_visible(Position(0, 1))


def test_collecting_all_treasures_wins():
    grid = make_grid(3, treasures=[(1, 0), (2, 0)])
    s = GameSession(grid)

    assert s.move(1, 0) == MoveOutcome.TREASURE
    assert s.treasures_found == 1
    assert not s.won
    assert s.score == 99
    assert s.move(1, 0) == MoveOutcome.WON
    assert s.won
    # the winning step is not charged
    assert s.score == 99

    # play is over
    assert s.move(0, 1) == MoveOutcome.WON
    assert s.player == Position(2, 0)
    assert s.score == 99


def test_explicit_treasure_total_controls_win():
    grid = make_grid(3, treasures=[(1, 0), (2, 0)])
    s = GameSession(grid, treasures_total=1)
    assert s.move(1, 0) == MoveOutcome.WON


def test_hint_reveals_first_step_and_costs_points():
    grid = make_grid(5, walls=VERTICAL_WALL, treasures=[(4, 4)])
    s = GameSession(grid)

    assert s.hint("bfs") == HintOutcome.SHOWN
    assert s.hint_cells == {Position(0, 1)}
    assert s.grid.is_visible(Position(0, 1))
    assert s.score == 97
    # the hint is an overlay, the cell itself is untouched
    assert s.grid.get(Position(0, 1)) == CellKind.EMPTY


def test_astar_hint_steps_towards_treasure():
    grid = make_grid(5, treasures=[(4, 4)])
    s = GameSession(grid)

    assert s.hint("astar") == HintOutcome.SHOWN
    (step,) = s.hint_cells
    assert step in (Position(1, 0), Position(0, 1))


def test_new_hint_replaces_previous_one():
    grid = make_grid(5, walls=VERTICAL_WALL, treasures=[(4, 4)])
    s = GameSession(grid)
    s.hint()
    s.hint()
    assert len(s.hint_cells) == 1
    assert s.score == 94


def test_hints_clear_after_moving():
    grid = make_grid(5, walls=VERTICAL_WALL, treasures=[(4, 4)])
    s = GameSession(grid)
    s.hint()
    s.move(0, 1)
    assert s.hint_cells == set()


def test_hint_without_enough_points():
    grid = make_grid(5, treasures=[(4, 4)])
    s = GameSession(grid, GameConfig(starting_score=2))
    assert s.hint() == HintOutcome.NO_POINTS
    assert s.score == 2
    assert s.hint_cells == set()


def test_hint_without_treasures():
    s = GameSession(make_grid(4))
    assert s.hint() == HintOutcome.NO_TREASURE
    assert s.score == 100


def test_hint_when_treasure_is_walled_in():
    grid = make_grid(6, walls=[(3, 2), (3, 4), (2, 3), (4, 3)], treasures=[(3, 3)])
    s = GameSession(grid)
    assert s.hint("bfs") == HintOutcome.NO_PATH
    assert s.hint("astar") == HintOutcome.NO_PATH
    assert s.score == 100


def test_nearest_treasure_breaks_ties_by_column_first():
    grid = make_grid(5, treasures=[(2, 0), (0, 2)])
    s = GameSession(grid)
    assert s.nearest_treasure() == Position(0, 2)

    grid = make_grid(5, treasures=[(1, 2), (2, 1), (3, 0)], player=(0, 0))
    assert GameSession(grid).nearest_treasure() == Position(1, 2)


def test_nearest_treasure_prefers_closer():
    grid = make_grid(6, treasures=[(5, 0), (1, 2)])
    s = GameSession(grid)
    assert s.nearest_treasure() == Position(1, 2)


def test_fog_of_war_can_be_disabled():
    grid = make_grid(4, treasures=[(3, 3)])
    s = GameSession(grid, GameConfig(fog_of_war=False))
    assert all(s.grid.is_visible(p) for p in s.grid.positions())


def test_custom_costs_apply():
    grid = make_grid(4, walls=[(1, 0)], treasures=[(3, 3)])
    s = GameSession(grid, GameConfig(starting_score=50, wall_penalty=5, move_cost=2))
    s.move(1, 0)
    s.move(0, 1)
    assert s.score == 43


def test_single_treasure_win_keeps_score():
    grid = make_grid(3, treasures=[(0, 1)])
    s = GameSession(grid, GameConfig(move_cost=4))
    assert s.move(0, 1) == MoveOutcome.WON
    assert s.score == 100
