from __future__ import annotations

import numpy as np
import pytest

from block_blast.game import CellState, PieceState, PointerEvent

from conftest import drag_and_drop, drag_events


def test_pointer_down_outside_any_slot_captures_nothing(single_block_game):
    game = single_block_game
    assert game.pointer_down(PointerEvent(5.0, 5.0)) is False
    assert game.placement.active is None
    assert all(p.is_idle for p in game.bag.pieces)


def test_pointer_down_captures_one_piece(single_block_game):
    game = single_block_game
    piece = game.bag[1]
    down, _ = drag_events(game, piece, 0, 0)
    assert game.pointer_down(down) is True
    assert piece.state is PieceState.DRAGGING
    assert game.placement.active is piece
    # a second pointer-down cannot capture while dragging
    other_down, _ = drag_events(game, game.bag[0], 0, 0)
    assert game.pointer_down(other_down) is False
    assert game.bag[0].is_idle


def test_move_paints_hints_at_legal_anchor(make_game):
    game = make_game([[1, 1], [0, 1]])
    piece = game.bag[0]
    down, target = drag_events(game, piece, 3, 4)
    game.pointer_down(down)
    assert game.pointer_move(target) is True
    assert piece.anchor == (3, 4)
    assert game.grid.hint_cells() == [(3, 4), (3, 5), (4, 5)]
    assert game.grid.filled_count() == 0
    assert game.get_state()["drag_position"] == pytest.approx(game.layout.cell_to_pixel(3, 4))


def test_move_recomputes_hints_every_tick(make_game):
    game = make_game([[1]])
    piece = game.bag[0]
    down, first = drag_events(game, piece, 1, 1)
    _, second = drag_events(game, piece, 5, 6)
    game.pointer_down(down)
    game.pointer_move(first)
    game.pointer_move(second)
    assert game.grid.hint_cells() == [(5, 6)]


def test_move_over_illegal_anchor_shows_no_hint(make_game):
    game = make_game([[1, 1, 1]])
    game.grid.fill_cell(2, 3, (9, 9, 9))
    piece = game.bag[0]
    down, legal = drag_events(game, piece, 0, 0)
    _, blocked = drag_events(game, piece, 2, 2)
    game.pointer_down(down)
    assert game.pointer_move(legal) is True
    assert game.pointer_move(blocked) is False
    assert game.grid.hint_cells() == []


def test_move_off_the_board_shows_no_hint(make_game):
    game = make_game([[1, 1, 1]])
    piece = game.bag[0]
    down, _ = drag_events(game, piece, 0, 0)
    game.pointer_down(down)
    # the piece is still over the bag, far below the board
    assert game.pointer_move(down) is False
    assert piece.anchor is None
    _, past_edge = drag_events(game, piece, 0, 6)
    assert game.pointer_move(past_edge) is False


def test_move_marks_sweep_hint_lines(single_block_game):
    game = single_block_game
    for col in range(7):
        game.grid.fill_cell(0, col, (1, 1, 1))
    piece = game.bag[0]
    down, target = drag_events(game, piece, 0, 7)
    game.pointer_down(down)
    game.pointer_move(target)
    assert game.grid.sweep_hint_rows == {0}
    assert game.grid.sweep_hint_columns == set()
    state = game.get_state()
    assert state["sweep_hint_rows"] == [0]


def test_legal_drop_commits_piece(make_game):
    game = make_game([[1, 1], [1, 1]])
    piece = game.bag[0]
    placement = drag_and_drop(game, piece, 6, 6)
    assert placement is not None
    assert (placement.row, placement.column, placement.cells_placed) == (6, 6, 4)
    assert piece.state is PieceState.COMMITTED
    assert piece not in game.bag.pieces
    assert len(game.bag) == 2
    assert game.grid.filled_count() == 4
    assert game.score == 4
    assert game.grid.hint_cells() == []
    assert game.placement.active is None


def test_drop_on_filled_cell_leaves_grid_unchanged(single_block_game):
    game = single_block_game
    assert game.place(0, 4, 4)
    before = game.grid.state.copy()
    score = game.score
    piece = game.bag[0]

    assert drag_and_drop(game, piece, 4, 4) is None

    assert np.array_equal(game.grid.state, before)
    assert game.score == score
    assert piece.state is PieceState.IDLE
    assert piece in game.bag.pieces
    assert piece.position is None and piece.anchor is None
    # still draggable afterwards
    assert drag_and_drop(game, piece, 4, 5) is not None


def test_release_clears_hints_and_sweep_hints(single_block_game):
    game = single_block_game
    for col in range(7):
        game.grid.fill_cell(0, col, (1, 1, 1))
    piece = game.bag[0]
    down, target = drag_events(game, piece, 0, 7)
    game.pointer_down(down)
    game.pointer_move(target)
    _, away = drag_events(game, piece, 0, 0)
    game.pointer_up(away)
    assert game.grid.hint_cells() == []
    assert game.grid.sweep_hint_rows == set()
    assert piece.is_idle


def test_touch_drag_lifts_piece_above_finger(single_block_game):
    game = single_block_game
    piece = game.bag[0]
    down, target = drag_events(game, piece, 5, 2)
    game.pointer_down(PointerEvent(down.x, down.y, is_touch=True))
    game.pointer_move(PointerEvent(target.x, target.y, is_touch=True))
    assert piece.anchor == (2, 2)
    assert game.grid.state[2, 2] == CellState.HINT


def test_pointer_up_without_drag_is_noop(single_block_game):
    game = single_block_game
    assert game.pointer_up(PointerEvent(300.0, 300.0)) is None
    assert game.grid.filled_count() == 0


def test_cancel_returns_piece(single_block_game):
    game = single_block_game
    piece = game.bag[2]
    down, target = drag_events(game, piece, 1, 1)
    game.pointer_down(down)
    game.pointer_move(target)
    game.placement.cancel(game.grid)
    assert piece.is_idle
    assert game.grid.hint_cells() == []
