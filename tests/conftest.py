from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from block_blast.game import BlockBlastGame, GameConfig, PointerEvent, Shape
from block_blast.game.bag import Piece


RED = (255, 0, 0)


def make_shape(rows: List[List[int]], color=RED) -> Shape:
    return Shape(rows, color)


def factory_for(rows: List[List[int]]) -> Callable:
    shape = make_shape(rows)
    return lambda rng: shape


def drag_events(game: BlockBlastGame, piece: Piece, row: int, col: int):
    """Pointer down/target events that carry ``piece`` onto anchor (row, col)."""
    box = piece.bounds
    grab = (box.x + box.width / 2, box.y + box.height / 2)
    ox, oy = game.layout.drag_origin(piece.shape, box)
    tx, ty = game.layout.cell_to_pixel(row, col)
    return PointerEvent(*grab), PointerEvent(grab[0] + tx - ox, grab[1] + ty - oy)


def drag_and_drop(game: BlockBlastGame, piece: Piece, row: int, col: int):
    down, target = drag_events(game, piece, row, col)
    game.pointer_down(down)
    game.pointer_move(target)
    return game.pointer_up(target)


@pytest.fixture
def single_block_game() -> BlockBlastGame:
    return BlockBlastGame(GameConfig(target_score=10_000, random_seed=0),
                          shape_factory=factory_for([[1]]))


@pytest.fixture
def make_game() -> Callable[..., BlockBlastGame]:
    def _make(rows: Optional[List[List[int]]] = None, **config) -> BlockBlastGame:
        config.setdefault("target_score", 10_000)
        config.setdefault("random_seed", 0)
        factory = factory_for(rows) if rows is not None else None
        return BlockBlastGame(GameConfig(**config), shape_factory=factory)
    return _make
