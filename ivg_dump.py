#!/usr/bin/env python3
"""
Dump the contents of an IconVG (.ivg) file.

By default every decoded token is printed next to the bytes it came from:

    89 49 56 47   Magic identifier
    02            Number of metadata chunks: 1
    ...

``--metadata`` prints only the view box and palette summary instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from iconvg import IconVGError, Metadata, TraceLogger, decode, decode_metadata, disassemble


def describe_metadata(metadata: Metadata) -> str:
    vb = metadata.view_box
    dx, dy = vb.aspect_ratio()
    distinct = len(set(metadata.palette))
    return "\n".join(
        [
            f"view box: ({vb.min[0]:+g}, {vb.min[1]:+g})-({vb.max[0]:+g}, {vb.max[1]:+g})",
            f"size: {dx:g} x {dy:g}",
            f"palette: {len(metadata.palette)} entries, {distinct} distinct",
        ]
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Disassemble an IconVG graphic.")
    parser.add_argument("input", type=Path, help="Path to the .ivg file")
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Only decode and print the metadata section",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the disassembly to this file instead of stdout",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        blob = args.input.read_bytes()
        if args.metadata:
            print(describe_metadata(decode_metadata(blob)))
            return 0
        if args.output is None:
            sys.stdout.write(disassemble(blob))
            return 0
        logger = TraceLogger(destination=args.output)
        decode(blob, trace=logger)
        logger.flush()
    except (IconVGError, OSError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    print(f"[+] Disassembly written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
