"""
IconVG decoding utilities split into modules for reuse.
"""

from .buffer import Cursor, decode_coordinate, decode_natural
from .decode import decode, decode_metadata, disassemble
from .entities import PathEntity, Subpath
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
from .metadata import DEFAULT_PALETTE, DEFAULT_VIEW_BOX, MAGIC, Metadata, Palette, ViewBox
from .opcodes import Mode
from .paths import PathBuilder
from .receiver import Receiver, RecordingReceiver

__all__ = [
    "Cursor",
    "decode_coordinate",
    "decode_natural",
    "decode",
    "decode_metadata",
    "disassemble",
    "PathEntity",
    "Subpath",
    "IconVGError",
    "InconsistentMetadataChunkLength",
    "InvalidMagicIdentifier",
    "InvalidMetadataChunkLength",
    "InvalidMetadataIdentifier",
    "InvalidNumber",
    "InvalidNumberOfMetadataChunks",
    "InvalidViewBox",
    "Unimplemented",
    "UnsupportedDrawingOpcode",
    "UnsupportedMetadataIdentifier",
    "UnsupportedStylingOpcode",
    "Trace",
    "TraceLogger",
    "DEFAULT_PALETTE",
    "DEFAULT_VIEW_BOX",
    "MAGIC",
    "Metadata",
    "Palette",
    "ViewBox",
    "Mode",
    "PathBuilder",
    "Receiver",
    "RecordingReceiver",
]
