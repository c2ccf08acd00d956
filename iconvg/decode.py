"""
IconVG decoder: metadata chunks followed by the styling/drawing opcode stream.

Decoding is a single forward pass over an immutable ``Cursor``. The first
malformed field raises the matching ``IconVGError`` subclass; there is no
recovery. Receiver calls are only made for instructions whose operands all
decoded, so a truncated file never produces a half-formed call.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple, Type

from .buffer import Cursor, decode_coordinate, decode_natural
from .errors import (
    IconVGError,
    InconsistentMetadataChunkLength,
    InvalidMagicIdentifier,
    InvalidMetadataChunkLength,
    InvalidMetadataIdentifier,
    InvalidNumber,
    InvalidNumberOfMetadataChunks,
    InvalidViewBox,
    Unimplemented,
    UnsupportedDrawingOpcode,
    UnsupportedMetadataIdentifier,
    UnsupportedStylingOpcode,
)
from .logging import Trace, TraceLogger
from .metadata import (
    DEFAULT_PALETTE,
    DEFAULT_VIEW_BOX,
    MAGIC,
    MID_DESCRIPTIONS,
    MID_SUGGESTED_PALETTE,
    MID_VIEW_BOX,
    Metadata,
    Palette,
    ViewBox,
    check_palette,
)
from .opcodes import START_PATH_ADJ_MASK, Instruction, Mode, Operands, lookup
from .receiver import Receiver


def decode_metadata(data: bytes) -> Metadata:
    """Decode only the metadata section of an IconVG graphic."""

    metadata, _ = _decode_header(bytes(data), Metadata(DEFAULT_VIEW_BOX, DEFAULT_PALETTE), None)
    return metadata


def decode(
    data: bytes,
    receiver: Optional[Receiver] = None,
    *,
    palette: Optional[Palette] = None,
    trace: Optional[Trace] = None,
) -> Metadata:
    """
    Decode a full IconVG graphic, driving ``receiver`` with every instruction.

    ``palette`` replaces the default palette before any metadata chunk is read.
    With no receiver the whole stream is still decoded and validated, which is
    what ``disassemble`` relies on. The decoded metadata is returned.
    """

    metadata = Metadata(DEFAULT_VIEW_BOX, DEFAULT_PALETTE)
    if palette is not None:
        metadata = replace(metadata, palette=check_palette(palette))
    metadata, src = _decode_header(bytes(data), metadata, trace)
    if receiver is not None:
        receiver.reset(metadata)

    mode = Mode.STYLING
    while len(src) > 0:
        if mode is Mode.STYLING:
            mode, src = decode_styling(src, receiver, trace)
        else:
            mode, src = decode_drawing(src, receiver, trace)
    return metadata


def disassemble(data: bytes) -> str:
    """Return a hex dump of ``data`` annotated with every decoded token."""

    logger = TraceLogger()
    decode(data, trace=logger)
    return logger.text()


def _decode_header(data: bytes, metadata: Metadata, trace: Optional[Trace]) -> Tuple[Metadata, Cursor]:
    if not data.startswith(MAGIC):
        raise InvalidMagicIdentifier()
    if trace is not None:
        trace(data[: len(MAGIC)], "Magic identifier")
    src = Cursor(data, len(MAGIC))

    n_chunks, n = decode_natural(src.data, src.offset)
    if n == 0:
        raise InvalidNumberOfMetadataChunks()
    if trace is not None:
        trace(src.head(n), f"Number of metadata chunks: {n_chunks}")
    src = src.advance(n)

    for _ in range(n_chunks):
        metadata, src = decode_metadata_chunk(src, metadata, trace)
    return metadata, src


def decode_metadata_chunk(src: Cursor, metadata: Metadata, trace: Optional[Trace] = None) -> Tuple[Metadata, Cursor]:
    """Decode one length-prefixed metadata chunk and fold it into ``metadata``."""

    length, n = decode_natural(src.data, src.offset)
    if n == 0:
        raise InvalidMetadataChunkLength()
    if trace is not None:
        trace(src.head(n), f"Metadata chunk length: {length}")
    src = src.advance(n)
    expected_remaining = len(src) - length

    mid, n = decode_natural(src.data, src.offset)
    if n == 0:
        raise InvalidMetadataIdentifier()
    if mid >= len(MID_DESCRIPTIONS):
        raise UnsupportedMetadataIdentifier()
    if trace is not None:
        trace(src.head(n), f"Metadata Identifier: {mid} ({MID_DESCRIPTIONS[mid]})")
    src = src.advance(n)

    if mid == MID_VIEW_BOX:
        bounds: List[float] = []
        for _ in range(4):
            value, src = decode_number(src, trace, error=InvalidViewBox)
            bounds.append(value)
        view_box = ViewBox(min=(bounds[0], bounds[1]), max=(bounds[2], bounds[3]))
        if not view_box.is_valid():
            raise InvalidViewBox()
        metadata = replace(metadata, view_box=view_box)
    elif mid == MID_SUGGESTED_PALETTE:
        raise Unimplemented("iconvg: suggested palette metadata is not yet implemented")
    else:
        raise UnsupportedMetadataIdentifier()

    if len(src) != expected_remaining:
        raise InconsistentMetadataChunkLength()
    return metadata, src


def decode_styling(src: Cursor, receiver: Optional[Receiver], trace: Optional[Trace] = None) -> Tuple[Mode, Cursor]:
    """Execute one styling-mode opcode and return the next mode."""

    opcode = src.peek()
    instruction = lookup(Mode.STYLING, opcode)
    if instruction is None:
        raise UnsupportedStylingOpcode(f"iconvg: unsupported styling opcode 0x{opcode:02x}")

    adj = opcode & START_PATH_ADJ_MASK
    if trace is not None:
        trace(src.head(1), instruction.label.format(adj=adj))
    src = src.advance(1)

    x, src = decode_number(src, trace)
    y, src = decode_number(src, trace)
    if receiver is not None:
        receiver.start_path(adj, x, y)
    return instruction.next_mode, src


def decode_drawing(src: Cursor, receiver: Optional[Receiver], trace: Optional[Trace] = None) -> Tuple[Mode, Cursor]:
    """Execute one drawing-mode opcode (including all its repetitions)."""

    opcode = src.peek()
    instruction = lookup(Mode.DRAWING, opcode)
    if instruction is None:
        raise UnsupportedDrawingOpcode(f"iconvg: unsupported drawing opcode 0x{opcode:02x}")

    reps = instruction.repeats(opcode)
    if trace is not None:
        if instruction.repeat_mask:
            trace(src.head(1), f"{instruction.label}, {reps} reps")
        else:
            trace(src.head(1), instruction.label)
    src = src.advance(1)

    for rep in range(reps):
        if trace is not None and rep != 0:
            trace(b"", f"{instruction.label}, implicit")
        if instruction.operands is Operands.ARC:
            args, src = _decode_arc_operands(src, trace)
        else:
            args, src = decode_coordinates(src, instruction.arity, trace)
        if receiver is not None:
            _dispatch(receiver, instruction, args)
    return instruction.next_mode, src


def _dispatch(receiver: Receiver, instruction: Instruction, args: tuple) -> None:
    getattr(receiver, instruction.method)(*args)


def decode_number(
    src: Cursor,
    trace: Optional[Trace] = None,
    *,
    error: Type[IconVGError] = InvalidNumber,
) -> Tuple[float, Cursor]:
    """Decode one number, raising ``error`` when the encoding is truncated."""

    value, n = decode_coordinate(src.data, src.offset)
    if n == 0:
        raise error()
    if trace is not None:
        trace(src.head(n), f"    {value:+g}")
    return value, src.advance(n)


def decode_coordinates(src: Cursor, count: int, trace: Optional[Trace] = None) -> Tuple[Tuple[float, ...], Cursor]:
    coords: List[float] = []
    for _ in range(count):
        value, src = decode_number(src, trace)
        coords.append(value)
    return tuple(coords), src


def decode_arc_flags(src: Cursor, trace: Optional[Trace] = None) -> Tuple[bool, bool, Cursor]:
    """Decode the arcTo flag natural: bit 0 is largeArc, bit 1 is sweep."""

    flags, n = decode_natural(src.data, src.offset)
    if n == 0:
        raise InvalidNumber()
    large_arc = flags & 0x01
    sweep = (flags >> 1) & 0x01
    if trace is not None:
        trace(src.head(n), f"    {flags:#x} (largeArc={large_arc}, sweep={sweep})")
    return bool(large_arc), bool(sweep), src.advance(n)


def _decode_arc_operands(src: Cursor, trace: Optional[Trace]) -> Tuple[tuple, Cursor]:
    (rx, ry, rotation), src = decode_coordinates(src, 3, trace)
    large_arc, sweep, src = decode_arc_flags(src, trace)
    (x, y), src = decode_coordinates(src, 2, trace)
    return (rx, ry, rotation, large_arc, sweep, x, y), src
