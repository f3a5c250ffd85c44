from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .layout import GridLayout, Point, Rect
from .shapes import Shape
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

ShapeFactory = Callable[[random.Random], Shape]


class PieceState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"


@dataclass
class Piece:
    """A shape in play, sitting in one of the bag slots."""

    shape: Shape
    slot: int
    bounds: Rect
    state: PieceState = PieceState.IDLE
    draggable: bool = True
    grab: Optional[Point] = None
    origin: Optional[Point] = None
    position: Optional[Point] = None
    anchor: Optional[Tuple[int, int]] = None

    @property
    def is_idle(self) -> bool:
        return self.state is PieceState.IDLE

    @property
    def is_committed(self) -> bool:
        return self.state is PieceState.COMMITTED

    def release(self) -> None:
        self.state = PieceState.IDLE
        self.grab = None
        self.origin = None
        self.position = None
        self.anchor = None


class Bag:
    """The set of pieces offered to the player.

    Holds ``pieces_per_set`` pieces; committed ones are pruned on ``update``
    and a fresh set is built in one go once none are left.
    """

    def __init__(
        self,
        layout: Optional[GridLayout] = None,
        rng: Optional[random.Random] = None,
        shape_factory: Optional[ShapeFactory] = None,
        pieces_per_set: int = 3,
    ) -> None:
        self.layout = layout or GridLayout()
        self.rng = rng or random.Random()
        self.shape_factory: ShapeFactory = shape_factory or Shape.random
        self.pieces_per_set = int(pieces_per_set)
        self.pieces: List[Piece] = []
        self.sets_dealt = 0
        self.fill()

    def fill(self) -> bool:
        if self.pieces:
            return False
        fresh = [
            Piece(shape=self.shape_factory(self.rng), slot=i, bounds=self.layout.slot_bounds(i))
            for i in range(self.pieces_per_set)
        ]
        self.pieces = fresh
        self.sets_dealt += 1
        LOGGER.debug("Dealt set %d: %s", self.sets_dealt, [p.shape for p in fresh])
        return True

    def update(self) -> bool:
        """Prune committed pieces and refill when empty. Returns True on refill."""
        self.pieces = [p for p in self.pieces if not p.is_committed]
        return self.fill()

    @property
    def shapes(self) -> List[Shape]:
        return [p.shape for p in self.pieces if not p.is_committed]

    @property
    def is_empty(self) -> bool:
        return not self.shapes

    def __len__(self) -> int:
        return len(self.pieces)

    def __getitem__(self, index: int) -> Piece:
        return self.pieces[index]

    def piece_at(self, x: float, y: float) -> Optional[Piece]:
        for piece in self.pieces:
            if piece.is_idle and piece.draggable and piece.bounds.contains(x, y):
                return piece
        return None
