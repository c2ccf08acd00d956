"""
Receiver that turns decoded drawing instructions into absolute polygons.

Relative operands are resolved against the current point, smooth curves
reflect the previous control point, and curves and arcs are flattened so the
result can be filled by any polygon rasterizer (see ``render_ivg_png.py``).
"""

from __future__ import annotations

from typing import List, Optional

from .entities import PathEntity, Point, Subpath
from .geometry import ARC_SEGMENTS, CURVE_SEGMENTS, flatten_arc, flatten_cubic, flatten_quad, reflect
from .metadata import RGBA, Metadata, Palette
from .receiver import Receiver

INITIAL_CSEL = 56
CREG_MASK = 0x3F


def fill_color(palette: Palette, adj: int, csel: int = INITIAL_CSEL) -> RGBA:
    """Color register ``CREG[CSEL-adj]`` for a freshly reset decoder."""

    return palette[(csel - adj) & CREG_MASK]


class PathBuilder(Receiver):
    def __init__(self, *, curve_segments: int = CURVE_SEGMENTS, arc_segments: int = ARC_SEGMENTS) -> None:
        self.curve_segments = curve_segments
        self.arc_segments = arc_segments
        self.metadata = Metadata()
        self.paths: List[PathEntity] = []
        self._clear()

    def _clear(self) -> None:
        self._adj = 0
        self._subpaths: List[Subpath] = []
        self._points: List[Point] = []
        self._current: Point = (0.0, 0.0)
        self._start: Point = (0.0, 0.0)
        self._quad_control: Optional[Point] = None
        self._cube_control: Optional[Point] = None

    def _finish_subpath(self, closed: bool) -> None:
        if len(self._points) > 1:
            self._subpaths.append(Subpath(points=tuple(self._points), closed=closed))
        if closed:
            self._current = self._start

    def _begin_subpath(self, point: Point) -> None:
        self._points = [point]
        self._current = point
        self._start = point
        self._quad_control = None
        self._cube_control = None

    def _extend(self, points: List[Point], *, quad: Optional[Point] = None, cube: Optional[Point] = None) -> None:
        self._points.extend(points)
        if points:
            self._current = points[-1]
        self._quad_control = quad
        self._cube_control = cube

    def _rel(self, dx: float, dy: float) -> Point:
        return self._current[0] + dx, self._current[1] + dy

    def reset(self, metadata: Metadata) -> None:
        self.metadata = metadata
        self.paths = []
        self._clear()

    def start_path(self, adj: int, x: float, y: float) -> None:
        self._clear()
        self._adj = adj
        self._begin_subpath((x, y))

    def close_path_end_path(self) -> None:
        self._finish_subpath(closed=True)
        self.paths.append(
            PathEntity(
                adj=self._adj,
                color=fill_color(self.metadata.palette, self._adj),
                subpaths=tuple(self._subpaths),
            )
        )
        self._clear()

    def close_path_abs_move_to(self, x: float, y: float) -> None:
        self._finish_subpath(closed=True)
        self._begin_subpath((x, y))

    def close_path_rel_move_to(self, x: float, y: float) -> None:
        self._finish_subpath(closed=True)
        self._begin_subpath(self._rel(x, y))

    def abs_h_line_to(self, x: float) -> None:
        self._extend([(x, self._current[1])])

    def rel_h_line_to(self, x: float) -> None:
        self._extend([self._rel(x, 0.0)])

    def abs_v_line_to(self, y: float) -> None:
        self._extend([(self._current[0], y)])

    def rel_v_line_to(self, y: float) -> None:
        self._extend([self._rel(0.0, y)])

    def abs_line_to(self, x: float, y: float) -> None:
        self._extend([(x, y)])

    def rel_line_to(self, x: float, y: float) -> None:
        self._extend([self._rel(x, y)])

    def _quad_to(self, control: Point, end: Point) -> None:
        self._extend(flatten_quad(self._current, control, end, self.curve_segments), quad=control)

    def abs_quad_to(self, x1: float, y1: float, x: float, y: float) -> None:
        self._quad_to((x1, y1), (x, y))

    def rel_quad_to(self, x1: float, y1: float, x: float, y: float) -> None:
        self._quad_to(self._rel(x1, y1), self._rel(x, y))

    def _smooth_quad_control(self) -> Point:
        if self._quad_control is None:
            return self._current
        return reflect(self._quad_control, self._current)

    def abs_smooth_quad_to(self, x: float, y: float) -> None:
        self._quad_to(self._smooth_quad_control(), (x, y))

    def rel_smooth_quad_to(self, x: float, y: float) -> None:
        self._quad_to(self._smooth_quad_control(), self._rel(x, y))

    def _cube_to(self, c1: Point, c2: Point, end: Point) -> None:
        self._extend(flatten_cubic(self._current, c1, c2, end, self.curve_segments), cube=c2)

    def abs_cube_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        self._cube_to((x1, y1), (x2, y2), (x, y))

    def rel_cube_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        self._cube_to(self._rel(x1, y1), self._rel(x2, y2), self._rel(x, y))

    def _smooth_cube_control(self) -> Point:
        if self._cube_control is None:
            return self._current
        return reflect(self._cube_control, self._current)

    def abs_smooth_cube_to(self, x2: float, y2: float, x: float, y: float) -> None:
        self._cube_to(self._smooth_cube_control(), (x2, y2), (x, y))

    def rel_smooth_cube_to(self, x2: float, y2: float, x: float, y: float) -> None:
        self._cube_to(self._smooth_cube_control(), self._rel(x2, y2), self._rel(x, y))

    def _arc_to(self, rx: float, ry: float, rotation: float, large_arc: bool, sweep: bool, end: Point) -> None:
        points = flatten_arc(self._current, rx, ry, rotation, large_arc, sweep, end, self.arc_segments)
        self._extend(points)

    def abs_arc_to(self, rx, ry, x_axis_rotation, large_arc, sweep, x, y) -> None:
        self._arc_to(rx, ry, x_axis_rotation, large_arc, sweep, (x, y))

    def rel_arc_to(self, rx, ry, x_axis_rotation, large_arc, sweep, x, y) -> None:
        self._arc_to(rx, ry, x_axis_rotation, large_arc, sweep, self._rel(x, y))
