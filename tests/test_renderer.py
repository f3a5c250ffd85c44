from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from block_blast.game import BlockBlastGame, GameConfig  # noqa: E402
from block_blast.visualization.renderer import EMPTY_CELL, Renderer  # noqa: E402

from conftest import drag_events, factory_for  # noqa: E402


def _pixel(surface, point):
    return tuple(surface.get_at((int(point[0]), int(point[1]))))[:3]


def _cell_centre(game, row, col):
    x, y = game.layout.cell_to_pixel(row, col)
    half = game.layout.cell_size / 2
    return x + half, y + half


@pytest.fixture
def scene():
    game = BlockBlastGame(GameConfig(target_score=100), shape_factory=factory_for([[1]]))
    surface = pygame.Surface((1080, 1920))
    return game, surface, Renderer(game.layout, game.config.sweep_threshold)


def test_filled_and_empty_cells_are_drawn(scene):
    game, surface, renderer = scene
    game.place(0, 2, 3)
    renderer.draw(surface, game.get_state())
    assert _pixel(surface, _cell_centre(game, 2, 3)) == (255, 0, 0)
    assert _pixel(surface, _cell_centre(game, 0, 0)) == EMPTY_CELL


def test_hint_cells_use_hint_color(scene):
    game, surface, renderer = scene
    piece = game.bag[0]
    down, target = drag_events(game, piece, 5, 5)
    game.pointer_down(down)
    game.pointer_move(target)
    renderer.draw(surface, game.get_state())
    # the dragged piece is drawn on top of its hint, so look at the grid arrays
    frame = game.get_state()
    assert frame["hints"] == [(5, 5)]
    assert tuple(int(v) for v in frame["colors"][5, 5]) == piece.shape.hint_color


def test_pieces_drawn_in_slots(scene):
    game, surface, renderer = scene
    renderer.draw(surface, game.get_state())
    box = game.bag[1].bounds
    assert _pixel(surface, (box.x + box.width / 2, box.y + box.height / 2)) == (255, 0, 0)


def test_progress_bar_fills_with_score(scene):
    game, surface, renderer = scene
    for col in range(8):
        game.place(0, 0, col)
    renderer.draw(surface, game.get_state())
    y = game.layout.origin_y + game.layout.board_px + 55
    assert _pixel(surface, (game.layout.origin_x + 5, y)) != EMPTY_CELL
    assert _pixel(surface, (game.layout.origin_x + game.layout.board_px - 5, y)) == EMPTY_CELL
