from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

MAGIC = b"\x89IVG"

MID_VIEW_BOX = 0
MID_SUGGESTED_PALETTE = 1
MID_DESCRIPTIONS = ("viewBox", "suggested palette")

PALETTE_SIZE = 64

RGBA = Tuple[int, int, int, int]
Palette = Tuple[RGBA, ...]


@dataclass(frozen=True)
class ViewBox:
    min: Tuple[float, float]
    max: Tuple[float, float]

    def aspect_ratio(self) -> Tuple[float, float]:
        return self.max[0] - self.min[0], self.max[1] - self.min[1]

    def is_valid(self) -> bool:
        bounds = (*self.min, *self.max)
        if not all(math.isfinite(v) for v in bounds):
            return False
        return self.min[0] <= self.max[0] and self.min[1] <= self.max[1]


DEFAULT_VIEW_BOX = ViewBox(min=(-32.0, -32.0), max=(32.0, 32.0))
DEFAULT_PALETTE: Palette = tuple((0x00, 0x00, 0x00, 0xFF) for _ in range(PALETTE_SIZE))


def check_palette(palette: Palette) -> Palette:
    """Normalise a caller-supplied palette, rejecting anything but 64 RGBA entries."""

    entries = tuple(tuple(int(c) for c in color) for color in palette)
    if len(entries) != PALETTE_SIZE:
        raise ValueError(f"palette must hold {PALETTE_SIZE} colors, got {len(entries)}")
    for color in entries:
        if len(color) != 4 or not all(0 <= c <= 0xFF for c in color):
            raise ValueError(f"palette entry {color!r} is not an 8-bit RGBA tuple")
    return entries  # type: ignore[return-value]


@dataclass(frozen=True)
class Metadata:
    view_box: ViewBox = DEFAULT_VIEW_BOX
    palette: Palette = field(default=DEFAULT_PALETTE)
