#!/usr/bin/env python3
"""
Render an IconVG (.ivg) graphic to PNG without a vector toolkit.

The decoder drives a PathBuilder, and each resulting path is filled with
Pillow using the even-odd rule. Example:

    python render_ivg_png.py icon.ivg icon.png --size 256
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from iconvg import IconVGError, Metadata, PathBuilder, PathEntity, decode
from iconvg.entities import Point

DEFAULT_RENDER_SIZE = 256
TRANSPARENT = (255, 255, 255, 0)


def load_paths(path: Path) -> Tuple[Metadata, Sequence[PathEntity]]:
    builder = PathBuilder()
    metadata = decode(path.read_bytes(), builder)
    return metadata, builder.paths


def _build_transform(metadata: Metadata, size_px: int) -> Callable[[Point], Point]:
    """Map the view box onto a square image, preserving the aspect ratio."""

    vb = metadata.view_box
    dx, dy = vb.aspect_ratio()
    dx = max(dx, 1e-9)
    dy = max(dy, 1e-9)
    scale = min(size_px / dx, size_px / dy)
    offset_x = (size_px - dx * scale) / 2.0
    offset_y = (size_px - dy * scale) / 2.0

    def transform(point: Point) -> Point:
        return (
            (point[0] - vb.min[0]) * scale + offset_x,
            (point[1] - vb.min[1]) * scale + offset_y,
        )

    return transform


def _path_mask(path: PathEntity, transform: Callable[[Point], Point], size_px: int) -> Image.Image:
    # Even-odd fill: XOR the coverage of every subpath.
    coverage = np.zeros((size_px, size_px), dtype=bool)
    for subpath in path.subpaths:
        if len(subpath.points) < 3 or not np.isfinite(subpath.points).all():
            continue
        layer = Image.new("1", (size_px, size_px), 0)
        ImageDraw.Draw(layer).polygon([transform(pt) for pt in subpath.points], fill=1)
        coverage ^= np.asarray(layer, dtype=bool)
    return Image.fromarray(coverage.astype(np.uint8) * 255)


def render_png(
    metadata: Metadata,
    paths: Sequence[PathEntity],
    destination: Path,
    size_px: int = DEFAULT_RENDER_SIZE,
    *,
    background: Tuple[int, int, int, int] = TRANSPARENT,
) -> Image.Image:
    transform = _build_transform(metadata, size_px)
    image = Image.new("RGBA", (size_px, size_px), background)
    for path in paths:
        layer = Image.new("RGBA", (size_px, size_px), (0, 0, 0, 0))
        layer.paste(tuple(path.color), mask=_path_mask(path, transform, size_px))
        image = Image.alpha_composite(image, layer)

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)
    return image


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render an IconVG graphic to PNG.")
    parser.add_argument("input", type=Path, help="Source .ivg file")
    parser.add_argument("output", type=Path, help="Destination PNG path")
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_RENDER_SIZE,
        help=f"Square output size in pixels (default: {DEFAULT_RENDER_SIZE})",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.size <= 0:
        raise SystemExit("--size must be a positive number of pixels.")
    try:
        metadata, paths = load_paths(args.input)
        render_png(metadata, paths, args.output, args.size)
    except (IconVGError, OSError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    print(f"[+] PNG with {len(paths)} path(s) written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
