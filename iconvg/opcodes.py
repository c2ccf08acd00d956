"""
Opcode tables for the two decoding modes.

The byte-to-instruction mapping is the wire contract, so it is kept as data:
every byte value maps to exactly one ``Instruction`` (or to ``None`` for
reserved values) and the state machine in ``decode.py`` only consults these
tables.

Drawing opcodes below 0xE0 carry their family in the top nibble and a repeat
count in the low bits. Line-to families use five repeat bits (the family spans
two nibbles), everything else uses four.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class Mode(enum.Enum):
    STYLING = "styling"
    DRAWING = "drawing"


class Operands(enum.Enum):
    COORDS = "coords"
    ARC = "arc"


@dataclass(frozen=True)
class Instruction:
    label: str
    method: str
    arity: int
    repeat_mask: int = 0
    operands: Operands = Operands.COORDS
    next_mode: Mode = Mode.DRAWING

    def repeats(self, opcode: int) -> int:
        return 1 + (opcode & self.repeat_mask)


START_PATH = Instruction(
    label="Start path, filled with CREG[CSEL-{adj}]; M (absolute moveTo)",
    method="start_path",
    arity=2,
)

# Styling opcodes in [STYLING_START_PATH_FIRST, STYLING_START_PATH_LAST] start a
# path; the low three bits pick the color register adjustment.
STYLING_START_PATH_FIRST = 0xC0
STYLING_START_PATH_LAST = 0xC6
START_PATH_ADJ_MASK = 0x07

# Families keyed by ``opcode >> 4`` for opcodes below DRAWING_SEGMENT_LIMIT.
DRAWING_SEGMENT_LIMIT = 0xE0
_LINE_TO_ABS = Instruction("L (absolute lineTo)", "abs_line_to", 2, 0x1F)
_LINE_TO_REL = Instruction("l (relative lineTo)", "rel_line_to", 2, 0x1F)
DRAWING_FAMILIES: Tuple[Instruction, ...] = (
    _LINE_TO_ABS,
    _LINE_TO_ABS,
    _LINE_TO_REL,
    _LINE_TO_REL,
    Instruction("T (absolute smooth quadTo)", "abs_smooth_quad_to", 2, 0x0F),
    Instruction("t (relative smooth quadTo)", "rel_smooth_quad_to", 2, 0x0F),
    Instruction("Q (absolute quadTo)", "abs_quad_to", 4, 0x0F),
    Instruction("q (relative quadTo)", "rel_quad_to", 4, 0x0F),
    Instruction("S (absolute smooth cubeTo)", "abs_smooth_cube_to", 4, 0x0F),
    Instruction("s (relative smooth cubeTo)", "rel_smooth_cube_to", 4, 0x0F),
    Instruction("C (absolute cubeTo)", "abs_cube_to", 6, 0x0F),
    Instruction("c (relative cubeTo)", "rel_cube_to", 6, 0x0F),
    Instruction("A (absolute arcTo)", "abs_arc_to", 6, 0x0F, Operands.ARC),
    Instruction("a (relative arcTo)", "rel_arc_to", 6, 0x0F, Operands.ARC),
)

DRAWING_SINGLES = {
    0xE1: Instruction("z (closePath); end path", "close_path_end_path", 0, next_mode=Mode.STYLING),
    0xE2: Instruction("z (closePath); M (absolute moveTo)", "close_path_abs_move_to", 2),
    0xE3: Instruction("z (closePath); m (relative moveTo)", "close_path_rel_move_to", 2),
    0xE6: Instruction("H (absolute horizontal lineTo)", "abs_h_line_to", 1),
    0xE7: Instruction("h (relative horizontal lineTo)", "rel_h_line_to", 1),
    0xE8: Instruction("V (absolute vertical lineTo)", "abs_v_line_to", 1),
    0xE9: Instruction("v (relative vertical lineTo)", "rel_v_line_to", 1),
}


def _build_styling_table() -> Tuple[Optional[Instruction], ...]:
    table: list[Optional[Instruction]] = [None] * 256
    for opcode in range(STYLING_START_PATH_FIRST, STYLING_START_PATH_LAST + 1):
        table[opcode] = START_PATH
    return tuple(table)


def _build_drawing_table() -> Tuple[Optional[Instruction], ...]:
    table: list[Optional[Instruction]] = [None] * 256
    for opcode in range(DRAWING_SEGMENT_LIMIT):
        table[opcode] = DRAWING_FAMILIES[opcode >> 4]
    for opcode, instruction in DRAWING_SINGLES.items():
        table[opcode] = instruction
    return tuple(table)


STYLING_TABLE = _build_styling_table()
DRAWING_TABLE = _build_drawing_table()


def lookup(mode: Mode, opcode: int) -> Optional[Instruction]:
    """Return the instruction for ``opcode`` in ``mode``, or ``None`` if reserved."""

    table = STYLING_TABLE if mode is Mode.STYLING else DRAWING_TABLE
    return table[opcode & 0xFF]


def next_mode(mode: Mode, opcode: int) -> Optional[Mode]:
    """Mode the decoder is in after executing ``opcode``; ``None`` for reserved bytes."""

    instruction = lookup(mode, opcode)
    if instruction is None:
        return None
    return instruction.next_mode
