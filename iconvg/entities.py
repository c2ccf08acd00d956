from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class Subpath:
    points: Tuple[Point, ...]
    closed: bool


@dataclass(frozen=True)
class PathEntity:
    adj: int
    color: Tuple[int, int, int, int]
    subpaths: Tuple[Subpath, ...]

    def bounds(self) -> Tuple[float, float, float, float] | None:
        xs = [pt[0] for sub in self.subpaths for pt in sub.points]
        ys = [pt[1] for sub in self.subpaths for pt in sub.points]
        if not xs:
            return None
        return min(xs), min(ys), max(xs), max(ys)
