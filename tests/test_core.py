from __future__ import annotations

import random

import numpy as np
import pytest

from conftest import fill
from falling_blocks.game import Action, Color, Game, GameConfig, Piece, PieceType, get_cells


def block_spawn_area(game: Game) -> None:
    # Every spawn orientation has a cell at (pivot.x + dx, -1) with dx in -1..1,
    # except the flat I, which sits on y == -2 starting at pivot.x - 1.
    cx = game.board.width // 2 - 1
    fill(game.board, -1, [cx - 1, cx, cx + 1])
    fill(game.board, -2, [cx - 1])


def test_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        Game(0, 10)


def test_initial_state():
    game = Game(18, 10)
    assert not game.game_started()
    assert not game.game_over()
    assert game.get_piece() is None
    assert game.get_board().num_rows == 0


def test_start_spawns_centered_above_visible_top(game):
    assert game.game_started()
    piece = game.get_piece()
    assert piece is not None
    assert piece.pivot == (1, -1)
    assert 0 <= piece.orientation < 4
    assert piece.get_color() != Color.EMPTY
    assert all(y < 0 for _, y in piece.get_coords())


def test_from_config_uses_seed():
    config = GameConfig(height=6, width=5, random_seed=42)
    first, second = Game.from_config(config), Game.from_config(config)
    kinds = []
    for g in (first, second):
        seen = []
        for _ in range(5):
            g._new_piece()
            p = g.get_piece()
            seen.append((p.kind, p.orientation, p.color))
        kinds.append(seen)
    assert kinds[0] == kinds[1]
    assert first.get_board().get_height() == 6


def test_left_at_wall_is_rejected(game):
    game.piece = Piece(kind=PieceType.O, orientation=0, pivot=(0, 2), color=Color.RED)
    assert game.update(Action.LEFT)
    assert game.get_piece().pivot == (0, 2)
    assert game.get_board().num_rows == 0


def test_rotation_into_wall_is_rejected(game):
    game.piece = Piece(kind=PieceType.I, orientation=1, pivot=(0, 3), color=Color.RED)
    assert game.update(Action.ROTATE)
    assert game.get_piece().orientation == 1
    assert game.get_piece().pivot == (0, 3)


def test_rotation_against_settled_cells_is_rejected(game):
    fill(game.board, 2, [2])
    game.piece = Piece(kind=PieceType.I, orientation=1, pivot=(1, 3), color=Color.RED)
    game.update(Action.ROTATE)
    assert game.get_piece().orientation == 1


def test_accepted_moves_update_piece(game):
    game.piece = Piece(kind=PieceType.T, orientation=0, pivot=(1, 1), color=Color.RED)
    game.update(Action.RIGHT)
    assert game.get_piece().pivot == (2, 1)
    game.update(Action.ROTATE)
    assert game.get_piece().orientation == 1
    game.update(Action.DOWN)
    assert game.get_piece().pivot == (2, 2)


def test_blocked_sideways_move_never_locks(game):
    game.piece = Piece(kind=PieceType.O, orientation=0, pivot=(0, 3), color=Color.RED)
    game.update(Action.LEFT)
    assert game.get_piece() is not None
    assert game.get_board().num_rows == 0


def test_full_row_locks_then_clears_on_next_update(game):
    game.piece = Piece(kind=PieceType.I, orientation=0, pivot=(1, -1), color=Color.MAGENTA)
    for _ in range(5):
        assert game.update(Action.DOWN)
    assert game.get_piece().pivot == (1, 4)
    assert game.get_board().num_rows == 0

    assert game.update(Action.DOWN)
    assert game.get_piece() is None
    board = game.get_board()
    assert board.num_rows == 1
    assert board.is_line_full(3)
    assert board.get_color(0, 3) == Color.MAGENTA

    assert game.update(Action.DOWN)
    assert game.last_rows_cleared == 1
    assert game.rows_cleared_total == 1
    assert board.num_rows == 0
    assert not board.is_line_full(3)
    assert game.get_piece() is not None


def test_partial_row_stays_after_lock(game):
    game.piece = Piece(kind=PieceType.O, orientation=0, pivot=(0, 3), color=Color.GREEN)
    game.update(Action.DOWN)
    assert game.get_piece() is None
    game.update(Action.LEFT)
    assert game.last_rows_cleared == 0
    assert game.get_board().get_color(1, 3) == Color.GREEN


@pytest.mark.parametrize("action", list(Action))
def test_blocked_spawn_ends_game(action):
    game = Game(4, 4, rng=random.Random(int(action)))
    block_spawn_area(game)
    rows_before = game.get_board().num_rows

    assert game.update(action) is False
    assert game.game_over()
    assert game.get_board().num_rows == rows_before


@pytest.mark.parametrize("seed", range(20))
def test_blocked_spawn_ends_game_for_any_piece(seed):
    game = Game(4, 4, rng=random.Random(seed))
    block_spawn_area(game)
    assert game.update(Action.DOWN) is False
    assert game.game_over()


def test_finished_game_ignores_updates():
    game = Game(4, 4, rng=random.Random(3))
    block_spawn_area(game)
    game.update(Action.DOWN)
    state = game.get_state()
    rows = game.get_board().num_rows
    piece = game.get_piece()
    for action in list(Action) * 3:
        assert game.update(action) is False
    assert game.game_over()
    assert game.get_board().num_rows == rows
    assert game.get_piece() is piece
    assert np.array_equal(game.get_state(), state)


def test_stacking_to_the_top_eventually_ends_game():
    game = Game(4, 4, rng=random.Random(11))
    game.start()
    for _ in range(2000):
        if not game.update(Action.DOWN):
            break
    assert game.game_over()


@pytest.mark.parametrize("kind", list(PieceType))
def test_in_bounds_cells_never_conflict_on_empty_board(kind):
    game = Game(6, 5)
    for orientation in range(4):
        for px in range(-2, 7):
            for py in range(-2, 9):
                cells = get_cells(kind, orientation, (px, py))
                if all(0 <= x < 5 and y < 6 for x, y in cells):
                    assert not game.detect_conflict(cells)


def test_conflict_rules():
    game = Game(4, 4)
    fill(game.board, 3, [1])
    assert game.detect_conflict([(-1, 0)])
    assert game.detect_conflict([(4, 0)])
    assert game.detect_conflict([(0, 4)])
    assert game.detect_conflict([(1, 3)])
    assert not game.detect_conflict([(0, -5), (3, -1), (2, 3)])


def test_get_state_overlays_visible_piece_cells(game):
    game.piece = Piece(kind=PieceType.O, orientation=0, pivot=(2, 0), color=Color.YELLOW)
    state = game.get_state()
    assert state.shape == (4, 4)
    assert state[0, 2] == Color.YELLOW
    assert state[0, 3] == Color.YELLOW
    assert int(np.count_nonzero(state)) == 2


def test_reset_returns_to_not_started(game):
    fill(game.board, 3, [0, 1])
    game.reset()
    assert not game.game_started()
    assert not game.game_over()
    assert game.get_piece() is None
    assert game.get_board().num_rows == 0


@pytest.mark.parametrize("seed", range(30))
def test_narrow_board_ends_game_instead_of_raising(seed):
    game = Game(6, 3, rng=random.Random(seed))
    game.start()
    if game.game_over():
        assert any(x < 0 or x >= 3 for x, _ in game.get_piece().get_coords())
    for _ in range(10):
        game.update(Action.DOWN)
    for row in game.get_board().rows:
        assert row.colors.shape == (3,)
    assert game.game_over() or game.get_piece() is None or not game.detect_conflict(game.get_piece().get_coords())


def test_spawn_that_cannot_fit_on_start_ends_game():
    game = Game(6, 1, rng=random.Random(0))
    game.start()
    assert game.game_started()
    assert game.game_over()
    assert game.update(Action.DOWN) is False
    assert game.get_board().num_rows == 0
