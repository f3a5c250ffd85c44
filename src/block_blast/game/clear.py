from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .grid import CellState, Grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ClearResult:
    rows: List[int] = field(default_factory=list)
    columns: List[int] = field(default_factory=list)

    @property
    def lines(self) -> int:
        return len(self.rows) + len(self.columns)

    def __bool__(self) -> bool:
        return self.lines > 0


def stagger(position: int) -> float:
    """Sweep start for the cell ``position`` steps along its line."""
    return -(position ** 1.5)


class ClearEngine:
    """Detects full lines and drives their sweep-out.

    Cells of a full line are put into sweep mode with a staggered negative
    start so the clear cascades along the line; ``advance`` moves every
    stage forward and empties cells whose stage passes ``threshold``.
    """

    def __init__(self, speed: float = 60.0, threshold: float = 10.0) -> None:
        self.speed = float(speed)
        self.threshold = float(threshold)

    def scan(self, grid: Grid) -> ClearResult:
        filled = grid.state == CellState.FILLED
        idle = np.isnan(grid.sweep)
        # a line counts once: skip lines whose cells are all already sweeping
        rows = np.flatnonzero(np.all(filled, axis=1) & np.any(idle, axis=1))
        cols = np.flatnonzero(np.all(filled, axis=0) & np.any(idle, axis=0))
        result = ClearResult(rows=[int(r) for r in rows], columns=[int(c) for c in cols])

        for row in result.rows:
            for col in range(grid.size):
                grid.sweep_out(row, col, stagger(col))
        for col in result.columns:
            for row in range(grid.size):
                grid.sweep_out(row, col, stagger(row))

        if result:
            LOGGER.debug("Full rows %s, full columns %s", result.rows, result.columns)
        return result

    def advance(self, grid: Grid, delta: float) -> bool:
        """Move every sweeping cell forward. Returns True while any remain."""
        if not grid.sweeping:
            return False
        step = max(float(delta), 0.0) * self.speed
        for row, col in sorted(grid.sweeping):
            stage = grid.sweep[row, col] + step
            if stage > self.threshold:
                grid.clear_cell(row, col)
            else:
                grid.sweep[row, col] = stage
        return grid.is_sweeping

    def finish(self, grid: Grid) -> None:
        for row, col in sorted(grid.sweeping):
            grid.clear_cell(row, col)
