from __future__ import annotations


class IconVGError(ValueError):
    """Base class for every malformed-input condition raised by the decoder."""

    message = "iconvg: decode error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidMagicIdentifier(IconVGError):
    message = "iconvg: invalid magic identifier"


class InvalidNumberOfMetadataChunks(IconVGError):
    message = "iconvg: invalid number of metadata chunks"


class InvalidMetadataChunkLength(IconVGError):
    message = "iconvg: invalid metadata chunk length"


class InvalidMetadataIdentifier(IconVGError):
    message = "iconvg: invalid metadata identifier"


class UnsupportedMetadataIdentifier(IconVGError):
    message = "iconvg: unsupported metadata identifier"


class InvalidViewBox(IconVGError):
    message = "iconvg: invalid view box"


class InconsistentMetadataChunkLength(IconVGError):
    message = "iconvg: inconsistent metadata chunk length"


class InvalidNumber(IconVGError):
    message = "iconvg: invalid number"


class UnsupportedStylingOpcode(IconVGError):
    message = "iconvg: unsupported styling opcode"


class UnsupportedDrawingOpcode(IconVGError):
    message = "iconvg: unsupported drawing opcode"


class Unimplemented(IconVGError):
    """Raised for well-formed input that uses a feature the decoder does not handle yet."""

    message = "iconvg: not yet implemented"
