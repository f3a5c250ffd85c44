from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import pygame

from block_blast.game import GridLayout, Piece
from block_blast.game.grid import CellState


BACKGROUND = (50, 50, 220)
EMPTY_CELL = (0, 0, 85)
GRID_LINE = (0, 0, 0)
PROGRESS = (50, 172, 220)
SWEEP_HINT = (255, 255, 255)


def _lerp(color: Tuple[int, int, int], target: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    t = min(max(t, 0.0), 1.0)
    a = np.asarray(color, dtype=np.float64)
    b = np.asarray(target, dtype=np.float64)
    mixed = a + (b - a) * t
    return int(mixed[0]), int(mixed[1]), int(mixed[2])


class Renderer:
    """Draws a ``BlockBlastGame.get_state()`` frame onto a pygame surface."""

    def __init__(self, layout: Optional[GridLayout] = None, sweep_threshold: float = 10.0) -> None:
        self.layout = layout or GridLayout()
        self.sweep_threshold = sweep_threshold

    def _cell_rect(self, row: int, col: int, inset: int = 0) -> pygame.Rect:
        x, y = self.layout.cell_to_pixel(row, col)
        cs = self.layout.cell_size
        return pygame.Rect(int(x) + inset, int(y) + inset, int(cs) - 2 * inset, int(cs) - 2 * inset)

    def _cell_color(self, frame: Dict[str, Any], row: int, col: int) -> Tuple[int, int, int]:
        kind = int(frame["state"][row, col])
        if kind == CellState.EMPTY:
            return EMPTY_CELL
        r, g, b = (int(v) for v in frame["colors"][row, col])
        if kind == CellState.HINT:
            return r, g, b
        stage = frame["sweep"][row, col]
        if not np.isnan(stage) and stage > 0:
            # fade to the empty color as the sweep completes
            return _lerp((r, g, b), EMPTY_CELL, stage / self.sweep_threshold)
        return r, g, b

    def draw_board(self, surface: pygame.Surface, frame: Dict[str, Any]) -> None:
        size = frame["state"].shape[0]
        for row in range(size):
            for col in range(size):
                rect = self._cell_rect(row, col)
                pygame.draw.rect(surface, self._cell_color(frame, row, col), rect)
                pygame.draw.rect(surface, GRID_LINE, rect, 2)
        for row in frame["sweep_hint_rows"]:
            x, y = self.layout.cell_to_pixel(row, 0)
            rect = pygame.Rect(int(x), int(y), int(self.layout.board_px), int(self.layout.cell_size))
            pygame.draw.rect(surface, SWEEP_HINT, rect, 4)
        for col in frame["sweep_hint_columns"]:
            x, y = self.layout.cell_to_pixel(0, col)
            rect = pygame.Rect(int(x), int(y), int(self.layout.cell_size), int(self.layout.board_px))
            pygame.draw.rect(surface, SWEEP_HINT, rect, 4)

    def draw_piece(self, surface: pygame.Surface, piece: Piece, dragging: bool) -> None:
        shape = piece.shape
        if dragging and piece.position is not None:
            block = self.layout.cell_size
            x0, y0 = piece.position
        else:
            block = self.layout.cell_size * self.layout.bag_scale
            box = piece.bounds
            x0 = box.x + (box.width - shape.width * block) / 2
            y0 = box.y + (box.height - shape.height * block) / 2
        for dr, dc in shape.offsets():
            rect = pygame.Rect(int(x0 + dc * block), int(y0 + dr * block), int(block), int(block))
            pygame.draw.rect(surface, shape.color, rect)
            pygame.draw.rect(surface, GRID_LINE, rect, 2)

    def draw_progress(self, surface: pygame.Surface, frame: Dict[str, Any]) -> None:
        x = int(self.layout.origin_x)
        y = int(self.layout.origin_y + self.layout.board_px + 40)
        width = int(self.layout.board_px)
        pygame.draw.rect(surface, EMPTY_CELL, pygame.Rect(x, y, width, 30))
        filled = int(width * frame["progress"])
        if filled > 0:
            pygame.draw.rect(surface, PROGRESS, pygame.Rect(x, y, filled, 30))

    def draw(self, surface: pygame.Surface, frame: Dict[str, Any]) -> None:
        surface.fill(BACKGROUND)
        self.draw_board(surface, frame)
        self.draw_progress(surface, frame)
        active = frame["active_piece"]
        for piece in frame["pieces"]:
            if piece is not active and not piece.is_committed:
                self.draw_piece(surface, piece, dragging=False)
        if active is not None:
            self.draw_piece(surface, active, dragging=True)
