"""
Variable-width number codec used by every IconVG field.

The low bits of the first byte select the width (little endian):

    xxxxxxx0                          -> 1 byte,  7 value bits
    xxxxxx01 xxxxxxxx                 -> 2 bytes, 14 value bits
    xxxxxx11 xxxxxxxx xxxxxxxx xxxxxxxx -> 4 bytes, 30 value bits

A consumed length of zero means the encoding is truncated.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple

COORD_BIAS_1 = 64
COORD_BIAS_2 = 64 * 128
COORD_SCALE_2 = 64.0


@dataclass(frozen=True)
class Cursor:
    """Read-only view over the bytes that have not been decoded yet."""

    data: bytes
    offset: int = 0

    def __len__(self) -> int:
        return max(0, len(self.data) - self.offset)

    def head(self, n: int) -> bytes:
        return self.data[self.offset : self.offset + n]

    def advance(self, n: int) -> Cursor:
        return Cursor(self.data, self.offset + n)

    def peek(self) -> int:
        return self.data[self.offset]


def decode_natural(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Return ``(value, bytes_consumed)``; zero consumed flags a bad encoding."""

    remaining = len(data) - offset
    if offset < 0 or remaining < 1:
        return 0, 0
    first = data[offset]
    if first & 0x01 == 0:
        return first >> 1, 1
    if remaining < 2:
        return 0, 0
    if first & 0x02 == 0:
        return struct.unpack_from("<H", data, offset)[0] >> 2, 2
    if remaining < 4:
        return 0, 0
    return struct.unpack_from("<I", data, offset)[0] >> 2, 4


def decode_coordinate(data: bytes, offset: int = 0) -> Tuple[float, int]:
    """Decode a signed coordinate with float32 semantics."""

    value, n = decode_natural(data, offset)
    if n == 0:
        return 0.0, 0
    if n == 1:
        return float(value - COORD_BIAS_1), 1
    if n == 2:
        return (value - COORD_BIAS_2) / COORD_SCALE_2, 2
    # The 4-byte form is a float32 with its two lowest mantissa bits cleared.
    return struct.unpack("<f", struct.pack("<I", (value << 2) & 0xFFFFFFFF))[0], 4
