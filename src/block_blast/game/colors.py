from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np


RGB = Tuple[int, int, int]


def hex_to_rgb(value: str) -> RGB:
    """Parse ``#rrggbb`` into an RGB tuple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {value!r}")
    num = int(value, 16)
    return (num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF


def rgb_to_hex(color: RGB) -> str:
    r, g, b = color
    return f"#{r:02X}{g:02X}{b:02X}"


def _shift(color: RGB, amount: int) -> RGB:
    shifted = np.clip(np.asarray(color, dtype=np.int32) + amount, 0, 255)
    return int(shifted[0]), int(shifted[1]), int(shifted[2])


def _percent_amount(percent: float) -> int:
    # half rounds up
    return int(math.floor(2.55 * percent + 0.5))


def darken_color(color: RGB, percent: float) -> RGB:
    return _shift(color, -_percent_amount(percent))


def lighten_color(color: RGB, percent: float) -> RGB:
    return _shift(color, _percent_amount(percent))


def blend_colors(first: RGB, second: RGB) -> RGB:
    """Channel-wise integer average of two colors."""
    mixed = (np.asarray(first, dtype=np.int32) + np.asarray(second, dtype=np.int32)) >> 1
    return int(mixed[0]), int(mixed[1]), int(mixed[2])


def hint_color_for(color: RGB) -> RGB:
    """Translucent-looking variant used to preview a shape on the board."""
    return blend_colors(darken_color(color, 90), lighten_color(color, 32.5))


@dataclass(frozen=True)
class ColorEntry:
    main: RGB
    hint: RGB

    @classmethod
    def from_hex(cls, value: str) -> "ColorEntry":
        main = hex_to_rgb(value)
        return cls(main=main, hint=hint_color_for(main))


BASE_COLORS = (
    "#e5bf00",
    "#ff5733",
    "#33ff57",
    "#ff33a1",
    "#33fff5",
    "#a133ff",
    "#ff8c33",
)

COLORS: Tuple[ColorEntry, ...] = tuple(ColorEntry.from_hex(c) for c in BASE_COLORS)
