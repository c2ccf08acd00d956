"""Small helpers for writing IconVG byte strings in tests."""

from __future__ import annotations

import struct

from iconvg.metadata import MAGIC, MID_VIEW_BOX


def nat(value: int) -> bytes:
    if value < 1 << 7:
        return bytes([value << 1])
    if value < 1 << 14:
        return struct.pack("<H", (value << 2) | 0x01)
    return struct.pack("<I", (value << 2) | 0x03)


def coord(value: float) -> bytes:
    if float(value).is_integer() and -64 <= value < 64:
        return bytes([(int(value) + 64) << 1])
    scaled = value * 64
    if float(scaled).is_integer() and -128 * 64 <= scaled < 128 * 64:
        return struct.pack("<H", ((int(scaled) + 64 * 128) << 2) | 0x01)
    bits = struct.unpack("<I", struct.pack("<f", value))[0]
    return struct.pack("<I", bits | 0x03)


def coords(*values: float) -> bytes:
    return b"".join(coord(v) for v in values)


def chunk(mid: int, payload: bytes) -> bytes:
    body = nat(mid) + payload
    return nat(len(body)) + body


def view_box_chunk(min_x: float, min_y: float, max_x: float, max_y: float) -> bytes:
    return chunk(MID_VIEW_BOX, coords(min_x, min_y, max_x, max_y))


def graphic(*chunks: bytes, body: bytes = b"") -> bytes:
    return MAGIC + nat(len(chunks)) + b"".join(chunks) + body
