from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PointerEvent:
    """A pointer position already normalized to canvas coordinates."""

    x: float
    y: float
    is_touch: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional["PointerEvent"]:
        """Build an event from raw host data, or None when coordinates are missing."""
        if not data:
            return None
        try:
            x = float(data["x"])
            y = float(data["y"])
        except (KeyError, TypeError, ValueError):
            return None
        event = cls(x, y, bool(data.get("is_touch", False)))
        return event if event.is_valid() else None

    def is_valid(self) -> bool:
        try:
            return math.isfinite(self.x) and math.isfinite(self.y)
        except TypeError:
            return False
