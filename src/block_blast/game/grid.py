from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Set, Tuple, Union

import numpy as np

from .colors import RGB
from .shapes import Shape


Coordinate = Tuple[int, int]


class CellState(IntEnum):
    EMPTY = 0
    FILLED = 1
    HINT = 2


@dataclass(frozen=True)
class EmptyCell:
    state: CellState = CellState.EMPTY


@dataclass(frozen=True)
class FilledCell:
    color: RGB
    row: int
    column: int
    sweep_stage: Optional[float] = None
    state: CellState = CellState.FILLED


@dataclass(frozen=True)
class HintCell:
    color: RGB
    state: CellState = CellState.HINT


Cell = Union[EmptyCell, FilledCell, HintCell]

EMPTY = EmptyCell()


class Grid:
    """Square board of cells.

    Cell kinds live in ``state`` as ``CellState`` codes. ``colors`` holds the
    color of filled and hint cells and ``sweep`` the sweep stage of cells
    being cleared (NaN when the cell is not sweeping). Sweeping cells stay
    ``FILLED`` until their stage passes the threshold.
    """

    def __init__(self, size: int = 8) -> None:
        if int(size) <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = int(size)
        self.state = np.zeros((self.size, self.size), dtype=np.int8)
        self.colors = np.zeros((self.size, self.size, 3), dtype=np.uint8)
        self.sweep = np.full((self.size, self.size), np.nan, dtype=np.float64)
        self.sweeping: Set[Coordinate] = set()
        self.sweep_hint_rows: Set[int] = set()
        self.sweep_hint_columns: Set[int] = set()

    @classmethod
    def from_strings(cls, rows: Sequence[str], color: RGB = (200, 200, 200)) -> "Grid":
        """Build a grid from text rows: ``#`` filled, ``.`` empty.

        Example::

            Grid.from_strings(["##.", "...", "#.#"])
        """
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError(f"Expected {size} rows of {size} characters")
        grid = cls(size)
        for r, row in enumerate(rows):
            for c, ch in enumerate(row):
                if ch == "#":
                    grid.fill_cell(r, c, color)
        return grid

    def reset(self) -> None:
        self.state.fill(CellState.EMPTY)
        self.colors.fill(0)
        self.sweep.fill(np.nan)
        self.sweeping.clear()
        self.clear_sweep_hint()

    # -- queries --------------------------------------------------------------

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_empty_at(self, row: int, col: int) -> bool:
        """True for in-bounds cells that are empty or only hinted."""
        if not self.is_inside(row, col):
            return False
        return self.state[row, col] != CellState.FILLED

    def can_place(self, shape: Shape, anchor_row: int, anchor_col: int) -> bool:
        for row, col in shape.cells_at(anchor_row, anchor_col):
            if not self.is_empty_at(row, col):
                return False
        return True

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        if not self.is_inside(row, col):
            return None
        kind = self.state[row, col]
        if kind == CellState.EMPTY:
            return EMPTY
        color = self._color(row, col)
        if kind == CellState.HINT:
            return HintCell(color)
        stage = self.sweep[row, col]
        return FilledCell(color, row, col, None if np.isnan(stage) else float(stage))

    def snapshot(self) -> List[List[Cell]]:
        return [[self.cell_at(r, c) for c in range(self.size)] for r in range(self.size)]  # type: ignore[misc]

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.state == CellState.FILLED))

    def hint_cells(self) -> List[Coordinate]:
        rows, cols = np.nonzero(self.state == CellState.HINT)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def anchor_cells(self) -> List[Coordinate]:
        """Empty or hinted cells, in row-major order."""
        rows, cols = np.nonzero(self.state != CellState.FILLED)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.state == CellState.FILLED, axis=1))]

    def full_columns(self) -> List[int]:
        return [int(c) for c in np.flatnonzero(np.all(self.state == CellState.FILLED, axis=0))]

    @property
    def is_sweeping(self) -> bool:
        return bool(self.sweeping)

    def _color(self, row: int, col: int) -> RGB:
        r, g, b = self.colors[row, col]
        return int(r), int(g), int(b)

    # -- mutation -------------------------------------------------------------

    def fill_cell(self, row: int, col: int, color: RGB) -> bool:
        if not self.is_inside(row, col):
            return False
        self.state[row, col] = CellState.FILLED
        self.colors[row, col] = color
        self.sweep[row, col] = np.nan
        self.sweeping.discard((row, col))
        return True

    def insert(self, shape: Shape, anchor_row: int, anchor_col: int) -> int:
        """Write the shape's blocks as filled cells and return how many.

        Legality is not checked here; callers run ``can_place`` first.
        Blocks falling outside the board are skipped.
        """
        written = 0
        for row, col in shape.cells_at(anchor_row, anchor_col):
            if self.fill_cell(row, col, shape.color):
                written += 1
        return written

    def insert_hint(self, shape: Shape, anchor_row: int, anchor_col: int) -> None:
        for row, col in shape.cells_at(anchor_row, anchor_col):
            if self.is_empty_at(row, col):
                self.state[row, col] = CellState.HINT
                self.colors[row, col] = shape.hint_color

    def clear_hints(self) -> None:
        mask = self.state == CellState.HINT
        if mask.any():
            self.state[mask] = CellState.EMPTY
            self.colors[mask] = 0

    def clear_cell(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            return
        self.state[row, col] = CellState.EMPTY
        self.colors[row, col] = 0
        self.sweep[row, col] = np.nan
        self.sweeping.discard((row, col))

    # -- sweep state ----------------------------------------------------------

    def sweep_out(self, row: int, col: int, order: float) -> bool:
        """Put a filled cell into sweep mode starting at stage ``order``.

        A cell already sweeping keeps the later (smaller) start.
        """
        if not self.is_inside(row, col) or self.state[row, col] != CellState.FILLED:
            return False
        current = self.sweep[row, col]
        if np.isnan(current):
            self.sweep[row, col] = order
            self.sweeping.add((row, col))
        elif order < current:
            self.sweep[row, col] = order
        return True

    def sweep_stage(self, row: int, col: int) -> Optional[float]:
        if not self.is_inside(row, col):
            return None
        stage = self.sweep[row, col]
        return None if np.isnan(stage) else float(stage)

    def mark_sweep_hint(self) -> None:
        """Record the lines a hinted placement would complete."""
        covered = self.state != CellState.EMPTY
        hinted = self.state == CellState.HINT
        rows = np.all(covered, axis=1) & np.any(hinted, axis=1)
        cols = np.all(covered, axis=0) & np.any(hinted, axis=0)
        self.sweep_hint_rows = {int(r) for r in np.flatnonzero(rows)}
        self.sweep_hint_columns = {int(c) for c in np.flatnonzero(cols)}

    def clear_sweep_hint(self) -> None:
        self.sweep_hint_rows = set()
        self.sweep_hint_columns = set()

    # -- helpers --------------------------------------------------------------

    def occupancy(self) -> np.ndarray:
        """0/1 matrix of filled cells."""
        return (self.state == CellState.FILLED).astype(np.int8)

    def copy(self) -> "Grid":
        new_grid = Grid(self.size)
        new_grid.state = self.state.copy()
        new_grid.colors = self.colors.copy()
        new_grid.sweep = self.sweep.copy()
        new_grid.sweeping = set(self.sweeping)
        new_grid.sweep_hint_rows = set(self.sweep_hint_rows)
        new_grid.sweep_hint_columns = set(self.sweep_hint_columns)
        return new_grid

    def __str__(self) -> str:
        glyphs = {CellState.EMPTY: "·", CellState.FILLED: "█", CellState.HINT: "▒"}
        return "\n".join("".join(glyphs[CellState(v)] for v in row) for row in self.state)
