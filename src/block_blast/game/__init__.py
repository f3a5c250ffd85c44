"""Game module for Block Blast.

Exports the core engine and supporting classes:
- Grid: Board cells, placement legality, hints and sweep state
- Shape: Immutable block pattern with its colors
- Bag: The three pieces on offer, refilled when used up
- PlacementEngine: Drag-to-place state machine
- ClearEngine: Full line detection and sweep-out animation
- ScoringRules: Scoring configuration and helpers
- BlockBlastGame: Game controller and terminal states
"""

from .bag import Bag, Piece, PieceState
from .clear import ClearEngine, ClearResult
from .colors import COLORS, ColorEntry
from .core import BlockBlastGame, GameConfig
from .events import PointerEvent
from .grid import Cell, CellState, EmptyCell, FilledCell, Grid, HintCell
from .layout import GridLayout, Rect
from .placement import Placement, PlacementEngine
from .rules import ScoringRules
from .shapes import SHAPE_CATALOG, Shape
from .timer import FrameTimer

__all__ = [
    "Bag",
    "Piece",
    "PieceState",
    "ClearEngine",
    "ClearResult",
    "COLORS",
    "ColorEntry",
    "BlockBlastGame",
    "GameConfig",
    "PointerEvent",
    "Cell",
    "CellState",
    "EmptyCell",
    "FilledCell",
    "Grid",
    "HintCell",
    "GridLayout",
    "Rect",
    "Placement",
    "PlacementEngine",
    "ScoringRules",
    "SHAPE_CATALOG",
    "Shape",
    "FrameTimer",
]
