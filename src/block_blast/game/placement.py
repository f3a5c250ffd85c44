from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .bag import Bag, Piece, PieceState
from .events import PointerEvent
from .grid import Grid
from .layout import GridLayout, Point
from .shapes import Shape
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class Placement:
    shape: Shape
    row: int
    column: int
    cells_placed: int


class PlacementEngine:
    """Drag-to-place state machine.

    A piece goes IDLE -> DRAGGING on pointer-down inside its slot box, and on
    pointer-up either COMMITTED (merged into the grid) or back to IDLE. Only
    one piece is dragged at a time. The grid and bag are passed in on every
    call.
    """

    def __init__(self, layout: Optional[GridLayout] = None) -> None:
        self.layout = layout or GridLayout()
        self.active: Optional[Piece] = None

    @property
    def is_dragging(self) -> bool:
        return self.active is not None

    def pointer_down(self, event: PointerEvent, bag: Bag) -> bool:
        if self.active is not None:
            return False
        piece = bag.piece_at(event.x, event.y)
        if piece is None:
            return False
        piece.state = PieceState.DRAGGING
        piece.grab = (event.x, event.y)
        piece.origin = self.layout.drag_origin(piece.shape, piece.bounds)
        self._follow(piece, event)
        self.active = piece
        LOGGER.debug("Picked up slot %d at (%.1f, %.1f)", piece.slot, event.x, event.y)
        return True

    def pointer_move(self, event: PointerEvent, grid: Grid) -> Optional[Tuple[int, int]]:
        """Follow the pointer and refresh the hint. Returns the legal anchor, if any."""
        piece = self.active
        if piece is None:
            return None
        self._follow(piece, event)
        grid.clear_hints()
        grid.clear_sweep_hint()
        anchor = piece.anchor
        if anchor is None or not grid.can_place(piece.shape, *anchor):
            return None
        grid.insert_hint(piece.shape, *anchor)
        grid.mark_sweep_hint()
        return anchor

    def pointer_up(self, event: PointerEvent, grid: Grid) -> Optional[Placement]:
        piece = self.active
        if piece is None:
            return None
        self._follow(piece, event)
        self.active = None
        grid.clear_hints()
        grid.clear_sweep_hint()
        anchor = piece.anchor
        if anchor is not None and grid.can_place(piece.shape, *anchor):
            return self.commit(grid, piece, *anchor)
        LOGGER.debug("Dropped slot %d on an illegal spot, returning it to the bag", piece.slot)
        piece.release()
        return None

    def commit(self, grid: Grid, piece: Piece, row: int, col: int) -> Optional[Placement]:
        """Merge a piece into the grid when it fits at (row, col)."""
        if piece.is_committed or not grid.can_place(piece.shape, row, col):
            return None
        cells = grid.insert(piece.shape, row, col)
        piece.state = PieceState.COMMITTED
        piece.anchor = (row, col)
        if self.active is piece:
            self.active = None
        LOGGER.debug("Placed slot %d at (%d, %d), %d cells", piece.slot, row, col, cells)
        return Placement(shape=piece.shape, row=row, column=col, cells_placed=cells)

    def cancel(self, grid: Grid) -> None:
        if self.active is not None:
            self.active.release()
            self.active = None
        grid.clear_hints()
        grid.clear_sweep_hint()

    def _follow(self, piece: Piece, event: PointerEvent) -> None:
        assert piece.grab is not None and piece.origin is not None
        lift = self.layout.touch_lift() if event.is_touch else 0.0
        position: Point = (
            piece.origin[0] + event.x - piece.grab[0],
            piece.origin[1] + event.y - piece.grab[1] - lift,
        )
        piece.position = position
        piece.anchor = self.layout.pixel_to_cell(*position)
