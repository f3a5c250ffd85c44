from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    placement_points: int = 1
    line_clear_points: int = 10

    def score_for_placement(self, cells_placed: int) -> int:
        return max(cells_placed, 0) * self.placement_points

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points
