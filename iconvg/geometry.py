from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from .entities import Point

CURVE_SEGMENTS = 16
ARC_SEGMENTS = 8  # per quarter turn


def fuzzy_eq(a: float, b: float, tol: float = 1e-6) -> bool:
    return abs(a - b) <= tol


def points_match(p1: Point, p2: Point, tol: float = 1e-6) -> bool:
    return fuzzy_eq(p1[0], p2[0], tol) and fuzzy_eq(p1[1], p2[1], tol)


def reflect(point: Point, about: Point) -> Point:
    return 2 * about[0] - point[0], 2 * about[1] - point[1]


def _as_points(xs: np.ndarray, ys: np.ndarray) -> List[Point]:
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def flatten_quad(p0: Point, p1: Point, p2: Point, segments: int = CURVE_SEGMENTS) -> List[Point]:
    """Sample a quadratic Bezier, excluding ``p0`` and including ``p2``."""

    t = np.linspace(0.0, 1.0, segments + 1)[1:]
    mt = 1.0 - t
    xs = mt * mt * p0[0] + 2 * mt * t * p1[0] + t * t * p2[0]
    ys = mt * mt * p0[1] + 2 * mt * t * p1[1] + t * t * p2[1]
    return _as_points(xs, ys)


def flatten_cubic(p0: Point, p1: Point, p2: Point, p3: Point, segments: int = CURVE_SEGMENTS) -> List[Point]:
    """Sample a cubic Bezier, excluding ``p0`` and including ``p3``."""

    t = np.linspace(0.0, 1.0, segments + 1)[1:]
    mt = 1.0 - t
    a, b, c, d = mt**3, 3 * mt * mt * t, 3 * mt * t * t, t**3
    xs = a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0]
    ys = a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1]
    return _as_points(xs, ys)


def arc_center(
    start: Point,
    rx: float,
    ry: float,
    x_axis_rotation: float,
    large_arc: bool,
    sweep: bool,
    end: Point,
) -> Tuple[Point, float, float, float, float]:
    """
    Convert an SVG-style endpoint arc to center form.

    Returns ``(center, rx, ry, theta1, dtheta)`` with the radii scaled up when
    they are too small to span the two endpoints. Callers must handle the
    degenerate cases (coincident endpoints, zero radius) first.
    """

    phi = math.radians(x_axis_rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    dx2 = (start[0] - end[0]) / 2.0
    dy2 = (start[1] - end[1]) / 2.0
    x1p = cos_phi * dx2 + sin_phi * dy2
    y1p = -sin_phi * dx2 + cos_phi * dy2

    rx, ry = abs(rx), abs(ry)
    lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if lam > 1.0:
        scale = math.sqrt(lam)
        rx *= scale
        ry *= scale

    num = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    den = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    coef = math.sqrt(max(0.0, num / den)) if den > 0 else 0.0
    if large_arc == sweep:
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx

    cx = cos_phi * cxp - sin_phi * cyp + (start[0] + end[0]) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (start[1] + end[1]) / 2.0

    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    theta2 = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    dtheta = theta2 - theta1
    if sweep and dtheta < 0:
        dtheta += math.tau
    elif not sweep and dtheta > 0:
        dtheta -= math.tau
    return (cx, cy), rx, ry, theta1, dtheta


def flatten_arc(
    start: Point,
    rx: float,
    ry: float,
    x_axis_rotation: float,
    large_arc: bool,
    sweep: bool,
    end: Point,
    segments_per_quarter: int = ARC_SEGMENTS,
) -> List[Point]:
    """Sample an elliptical arc, excluding ``start`` and including ``end``."""

    if points_match(start, end):
        return []
    if not all(math.isfinite(v) for v in (*start, *end, rx, ry, x_axis_rotation)):
        return [end]
    if fuzzy_eq(rx, 0.0) or fuzzy_eq(ry, 0.0):
        return [end]

    (cx, cy), rx, ry, theta1, dtheta = arc_center(start, rx, ry, x_axis_rotation, large_arc, sweep, end)
    if not math.isfinite(dtheta):
        return [end]
    segments = max(1, math.ceil(abs(dtheta) / (math.pi / 2) * segments_per_quarter))
    phi = math.radians(x_axis_rotation)
    theta = np.linspace(theta1, theta1 + dtheta, segments + 1)[1:]
    xs = cx + rx * math.cos(phi) * np.cos(theta) - ry * math.sin(phi) * np.sin(theta)
    ys = cy + rx * math.sin(phi) * np.cos(theta) + ry * math.cos(phi) * np.sin(theta)
    points = _as_points(xs, ys)
    # Land exactly on the requested endpoint despite rounding.
    points[-1] = end
    return points
