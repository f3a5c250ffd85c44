from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .colors import COLORS, RGB, ColorEntry, hint_color_for


BlockStructure = np.ndarray


def _structure(rows: Sequence[Sequence[int]]) -> BlockStructure:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


# Shapes are placed exactly as oriented, so every orientation is its own entry.
SHAPE_CATALOG: Tuple[BlockStructure, ...] = (
    # dots and lines
    _structure([[1]]),
    _structure([[1, 1]]),
    _structure([[1], [1]]),
    _structure([[1, 1, 1]]),
    _structure([[1], [1], [1]]),
    _structure([[1, 1, 1, 1]]),
    _structure([[1], [1], [1], [1]]),
    _structure([[1, 1, 1, 1, 1]]),
    _structure([[1], [1], [1], [1], [1]]),
    # squares
    _structure([[1, 1], [1, 1]]),
    _structure([[1, 1, 1], [1, 1, 1], [1, 1, 1]]),
    # rectangles
    _structure([[1, 1, 1], [1, 1, 1]]),
    _structure([[1, 1], [1, 1], [1, 1]]),
    # small corners
    _structure([[1, 1], [1, 0]]),
    _structure([[1, 1], [0, 1]]),
    _structure([[1, 0], [1, 1]]),
    _structure([[0, 1], [1, 1]]),
    # big corners
    _structure([[1, 1, 1], [1, 0, 0], [1, 0, 0]]),
    _structure([[1, 1, 1], [0, 0, 1], [0, 0, 1]]),
    _structure([[1, 0, 0], [1, 0, 0], [1, 1, 1]]),
    _structure([[0, 0, 1], [0, 0, 1], [1, 1, 1]]),
    # L and J
    _structure([[1, 0], [1, 0], [1, 1]]),
    _structure([[0, 1], [0, 1], [1, 1]]),
    _structure([[1, 1], [1, 0], [1, 0]]),
    _structure([[1, 1], [0, 1], [0, 1]]),
    _structure([[1, 1, 1], [1, 0, 0]]),
    _structure([[1, 1, 1], [0, 0, 1]]),
    _structure([[1, 0, 0], [1, 1, 1]]),
    _structure([[0, 0, 1], [1, 1, 1]]),
    # T
    _structure([[1, 1, 1], [0, 1, 0]]),
    _structure([[0, 1, 0], [1, 1, 1]]),
    _structure([[1, 0], [1, 1], [1, 0]]),
    _structure([[0, 1], [1, 1], [0, 1]]),
    # S and Z
    _structure([[0, 1, 1], [1, 1, 0]]),
    _structure([[1, 1, 0], [0, 1, 1]]),
    _structure([[1, 0], [1, 1], [0, 1]]),
    _structure([[0, 1], [1, 1], [1, 0]]),
)


def _validate_structure(rows) -> BlockStructure:
    if isinstance(rows, np.ndarray):
        arr = rows
    else:
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise ValueError("Block structure must be rectangular")
        arr = np.array(rows)
    if arr.ndim != 2 or arr.size == 0:
        raise ValueError("Block structure must be a non-empty 2D matrix")
    if not np.isin(arr, (0, 1)).all():
        raise ValueError("Block structure may only contain 0 and 1")
    if not arr.any():
        raise ValueError("Block structure needs at least one block")
    arr = arr.astype(np.int8, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Shape:
    """An immutable block pattern with its color."""

    block_structure: BlockStructure
    color: RGB
    hint_color: RGB = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "block_structure", _validate_structure(self.block_structure))
        if self.hint_color is None:
            object.__setattr__(self, "hint_color", hint_color_for(self.color))

    @classmethod
    def from_catalog(cls, index: int, color: ColorEntry | int = 0) -> "Shape":
        if not 0 <= index < len(SHAPE_CATALOG):
            raise ValueError(f"No shape {index} in a catalog of {len(SHAPE_CATALOG)}")
        entry = COLORS[color] if isinstance(color, int) else color
        return cls(SHAPE_CATALOG[index], entry.main, entry.hint)

    @classmethod
    def random(
        cls,
        rng: Optional[random.Random] = None,
        catalog: Sequence[BlockStructure] = SHAPE_CATALOG,
        colors: Sequence[ColorEntry] = COLORS,
    ) -> "Shape":
        # independent uniform draws for pattern and color
        rng = rng or random.Random()
        structure = catalog[rng.randrange(len(catalog))]
        entry = colors[rng.randrange(len(colors))]
        return cls(structure, entry.main, entry.hint)

    @property
    def height(self) -> int:
        return int(self.block_structure.shape[0])

    @property
    def width(self) -> int:
        return int(self.block_structure.shape[1])

    @property
    def block_count(self) -> int:
        return int(self.block_structure.sum())

    def offsets(self) -> List[Tuple[int, int]]:
        """(row, col) offsets of every block relative to the anchor."""
        rows, cols = np.nonzero(self.block_structure)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def cells_at(self, anchor_row: int, anchor_col: int) -> List[Tuple[int, int]]:
        return [(anchor_row + dr, anchor_col + dc) for dr, dc in self.offsets()]

    def padded(self, size: int = 5) -> np.ndarray:
        """Block structure in the top-left corner of a ``size x size`` canvas."""
        out = np.zeros((size, size), dtype=np.int8)
        h, w = min(self.height, size), min(self.width, size)
        out[:h, :w] = self.block_structure[:h, :w]
        return out

    def __repr__(self) -> str:
        rows = "/".join("".join("#" if v else "." for v in row) for row in self.block_structure)
        return f"Shape({rows}, color={self.color})"
