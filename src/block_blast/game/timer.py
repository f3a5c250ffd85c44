from __future__ import annotations

import time
from typing import Callable, Optional


class FrameTimer:
    """Measures frame deltas in seconds, clamped to ``max_step``."""

    def __init__(self, max_step: float = 0.05, clock: Optional[Callable[[], float]] = None) -> None:
        self.max_step = max_step
        self.clock = clock or time.monotonic
        self.game_time = 0.0
        self.last_timestamp: Optional[float] = None

    def tick(self) -> float:
        current = self.clock()
        if self.last_timestamp is None:
            delta = 0.0
        else:
            delta = current - self.last_timestamp
        self.last_timestamp = current
        game_delta = min(max(delta, 0.0), self.max_step)
        self.game_time += game_delta
        return game_delta
