from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .shapes import Shape


Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        # strict on every edge
        return self.x < px < self.x + self.width and self.y < py < self.y + self.height


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class GridLayout:
    """Pixel geometry of the board and the bag on a 1080 px wide canvas."""

    board_size: int = 8
    origin_x: float = 90.0
    origin_y: float = 90.0
    board_px: float = 900.0
    bag_x: float = 90.0
    bag_y: float = 1530.0
    slot_spacing: float = 312.5
    slot_offset_y: float = 25.0
    slot_px: float = 275.0
    touch_lift_cells: float = 3.0

    @property
    def cell_size(self) -> float:
        return self.board_px / self.board_size

    @property
    def bag_scale(self) -> float:
        """Scale of a shape drawn in its slot relative to the board."""
        return self.slot_px / 5 / self.cell_size

    def cell_to_pixel(self, row: int, col: int) -> Point:
        return self.origin_x + col * self.cell_size, self.origin_y + row * self.cell_size

    def pixel_to_cell(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Nearest cell to a pixel, or None when it falls off the board."""
        row = _round_half_up((y - self.origin_y) / self.cell_size)
        col = _round_half_up((x - self.origin_x) / self.cell_size)
        if 0 <= row < self.board_size and 0 <= col < self.board_size:
            return row, col
        return None

    def slot_bounds(self, index: int) -> Rect:
        return Rect(
            self.bag_x + self.slot_spacing * index,
            self.bag_y + self.slot_offset_y,
            self.slot_px,
            self.slot_px,
        )

    def drag_origin(self, shape: Shape, slot: Rect) -> Point:
        """Full-scale top-left of a shape centred in its slot box."""
        cs = self.cell_size
        x = slot.x + slot.width / 2 - shape.width * cs / 2
        y = slot.y + slot.height / 2 - shape.height * cs / 2
        return x, y

    def touch_lift(self) -> float:
        return self.touch_lift_cells * self.cell_size

    def for_board(self, board_size: int) -> "GridLayout":
        if board_size == self.board_size:
            return self
        return replace(self, board_size=board_size)
