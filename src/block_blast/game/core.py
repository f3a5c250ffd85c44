from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .bag import Bag, ShapeFactory
from .clear import ClearEngine, ClearResult
from .events import PointerEvent
from .grid import Grid
from .layout import GridLayout
from .placement import Placement, PlacementEngine
from .rules import ScoringRules
from ..utils.logger import get_logger, set_debugging


LOGGER = get_logger(__name__)

Callback = Callable[[], None]


@dataclass
class GameConfig:
    board_size: int = 8
    pieces_per_set: int = 3
    target_score: int = 500
    random_seed: Optional[int] = None
    sweep_speed: float = 60.0
    sweep_threshold: float = 10.0
    debugging: bool = False

    def __post_init__(self) -> None:
        if self.board_size <= 0:
            raise ValueError(f"board_size must be positive, got {self.board_size}")
        if self.pieces_per_set <= 0:
            raise ValueError(f"pieces_per_set must be positive, got {self.pieces_per_set}")
        if self.target_score <= 0:
            raise ValueError(f"target_score must be positive, got {self.target_score}")
        if self.sweep_speed <= 0:
            raise ValueError(f"sweep_speed must be positive, got {self.sweep_speed}")


class BlockBlastGame:
    """Owns the grid, bag and score and wires the engines together.

    Hosts feed pointer events and call ``advance_animation`` once per frame
    while it returns True. ``on_game_won`` and ``on_game_lost`` fire at most
    once per session.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        layout: Optional[GridLayout] = None,
        on_game_won: Optional[Callback] = None,
        on_game_lost: Optional[Callback] = None,
        shape_factory: Optional[ShapeFactory] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.layout = (layout or GridLayout()).for_board(self.config.board_size)
        self.on_game_won = on_game_won
        self.on_game_lost = on_game_lost
        self.shape_factory = shape_factory
        set_debugging(self.config.debugging)

        self.rng = random.Random(self.config.random_seed)
        self.grid = Grid(self.config.board_size)
        self.placement = PlacementEngine(self.layout)
        self.clearer = ClearEngine(self.config.sweep_speed, self.config.sweep_threshold)
        self.bag = self._new_bag()

        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.won = False
        self.lost = False

    def _new_bag(self) -> Bag:
        return Bag(
            layout=self.layout,
            rng=self.rng,
            shape_factory=self.shape_factory,
            pieces_per_set=self.config.pieces_per_set,
        )

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.placement.cancel(self.grid)
        self.grid.reset()
        self.bag = self._new_bag()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.won = False
        self.lost = False

    @property
    def target_score(self) -> int:
        return self.config.target_score

    @property
    def progress(self) -> float:
        return min(self.score / self.target_score, 1.0)

    @property
    def is_over(self) -> bool:
        return self.won or self.lost

    # -- input ----------------------------------------------------------------

    def pointer_down(self, event: Optional[PointerEvent]) -> bool:
        if not self._accept(event, "down"):
            return False
        assert event is not None
        captured = self.placement.pointer_down(event, self.bag)
        self.update()
        return captured

    def pointer_move(self, event: Optional[PointerEvent]) -> bool:
        """Returns True when the dragged piece currently has a legal spot."""
        if not self._accept(event, "move"):
            return False
        assert event is not None
        return self.placement.pointer_move(event, self.grid) is not None

    def pointer_up(self, event: Optional[PointerEvent]) -> Optional[Placement]:
        if not self._accept(event, "up"):
            return None
        assert event is not None
        placement = self.placement.pointer_up(event, self.grid)
        if placement is not None:
            self._award_placement(placement)
        self.update()
        return placement

    def _accept(self, event: Optional[PointerEvent], kind: str) -> bool:
        if event is None or not event.is_valid():
            LOGGER.debug("Ignoring pointer %s event without coordinates: %r", kind, event)
            return False
        LOGGER.debug("Pointer %s at (%.1f, %.1f)", kind, event.x, event.y)
        return True

    def place(self, piece_index: int, row: int, col: int) -> bool:
        """Place a bag piece directly at (row, col), bypassing the drag."""
        if not 0 <= piece_index < len(self.bag):
            return False
        piece = self.bag[piece_index]
        if not piece.is_idle:
            return False
        placement = self.placement.commit(self.grid, piece, row, col)
        if placement is None:
            return False
        self._award_placement(placement)
        self.update()
        return True

    def _award_placement(self, placement: Placement) -> None:
        self.score += self.rules.score_for_placement(placement.cells_placed)
        self.pieces_placed += 1

    # -- frame ----------------------------------------------------------------

    def update(self) -> ClearResult:
        cleared = self.clearer.scan(self.grid)
        if cleared:
            self.lines_cleared_total += cleared.lines
            self.score += self.rules.score_for_lines(cleared.lines)
            LOGGER.info(
                "Cleared %d line(s), rows=%s columns=%s, score %d",
                cleared.lines, cleared.rows, cleared.columns, self.score,
            )
        if self.bag.update():
            LOGGER.debug("Bag refilled")
        self.check_terminal()
        return cleared

    def advance_animation(self, delta: float) -> bool:
        """Advance sweeps by ``delta`` seconds. Returns True while animating."""
        was_sweeping = self.grid.is_sweeping
        animating = self.clearer.advance(self.grid, delta)
        if was_sweeping and not animating:
            self.check_terminal()
        return animating

    def finish_animation(self) -> None:
        if self.grid.is_sweeping:
            self.clearer.finish(self.grid)
            self.check_terminal()

    # -- terminal states ------------------------------------------------------

    def is_game_won(self) -> bool:
        return self.score >= self.target_score

    def is_game_lost(self) -> bool:
        """True when no bag shape fits with its first block on an empty or hinted cell."""
        shapes = [(shape, shape.offsets()[0]) for shape in self.bag.shapes]
        for row, col in self.grid.anchor_cells():
            for shape, (dr, dc) in shapes:
                if self.grid.can_place(shape, row - dr, col - dc):
                    return False
        return True

    def check_terminal(self) -> None:
        if self.won or self.lost:
            return
        if self.is_game_won():
            self.won = True
            LOGGER.info("Game won with %d/%d points", self.score, self.target_score)
            if self.on_game_won is not None:
                self.on_game_won()
            return
        if self.grid.is_sweeping or self.bag.is_empty:
            return
        if self.is_game_lost():
            self.lost = True
            LOGGER.info("Game lost with %d/%d points", self.score, self.target_score)
            if self.on_game_lost is not None:
                self.on_game_lost()

    # -- observation ----------------------------------------------------------

    def valid_actions(self) -> List[tuple]:
        """(piece_index, row, col) for every legal placement of an idle piece."""
        actions = []
        for idx, piece in enumerate(self.bag.pieces):
            if not piece.is_idle:
                continue
            for row in range(self.grid.size):
                for col in range(self.grid.size):
                    if self.grid.can_place(piece.shape, row, col):
                        actions.append((idx, row, col))
        return actions

    def get_state(self) -> Dict[str, Any]:
        """Everything a renderer needs for one frame."""
        active = self.placement.active
        return {
            "cells": self.grid.snapshot(),
            "state": self.grid.state.copy(),
            "colors": self.grid.colors.copy(),
            "sweep": self.grid.sweep.copy(),
            "hints": self.grid.hint_cells(),
            "sweep_hint_rows": sorted(self.grid.sweep_hint_rows),
            "sweep_hint_columns": sorted(self.grid.sweep_hint_columns),
            "pieces": list(self.bag.pieces),
            "active_piece": active,
            "drag_position": active.position if active is not None else None,
            "score": self.score,
            "target_score": self.target_score,
            "progress": self.progress,
            "animating": self.grid.is_sweeping,
            "won": self.won,
            "lost": self.lost,
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_placed": self.pieces_placed,
            "lines_cleared": self.lines_cleared_total,
            "sets_dealt": self.bag.sets_dealt,
            "filled_ratio": float(np.mean(self.grid.occupancy())),
        }
