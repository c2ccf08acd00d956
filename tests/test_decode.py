import pytest

from iconvg import (
    IconVGError,
    InvalidNumber,
    Receiver,
    RecordingReceiver,
    TraceLogger,
    UnsupportedDrawingOpcode,
    UnsupportedStylingOpcode,
    decode,
    disassemble,
)
from iconvg.buffer import Cursor
from iconvg.decode import decode_drawing, decode_styling
from iconvg.opcodes import Mode

from ivg_bytes import coords, graphic, nat, view_box_chunk

START = b"\xc0" + coords(1, 2)


def _run(body: bytes) -> RecordingReceiver:
    receiver = RecordingReceiver()
    decode(graphic(body=body), receiver)
    return receiver


def test_empty_program_only_resets() -> None:
    receiver = RecordingReceiver()
    metadata = decode(graphic(view_box_chunk(0, 0, 10, 10)), receiver)
    assert receiver.calls == [("reset", (metadata,))]


def test_start_path_then_exhaustion_succeeds() -> None:
    receiver = _run(b"\xc3" + coords(-3, 7.5))
    assert receiver.calls[1:] == [("start_path", (3, -3.0, 7.5))]


def test_line_to_repeat_count() -> None:
    receiver = _run(START + b"\x02" + coords(1, 2, 3, 4, 5, 6) + b"\xe6" + coords(9))
    assert receiver.calls[2:] == [
        ("abs_line_to", (1.0, 2.0)),
        ("abs_line_to", (3.0, 4.0)),
        ("abs_line_to", (5.0, 6.0)),
        ("abs_h_line_to", (9.0,)),
    ]


def test_long_line_run_uses_five_repeat_bits() -> None:
    receiver = _run(START + b"\x3f" + coords(*range(64)))
    assert receiver.names()[2:] == ["rel_line_to"] * 32
    assert receiver.calls[-1] == ("rel_line_to", (62.0, 63.0))


@pytest.mark.parametrize(
    ("opcode", "operands", "method"),
    [
        (0x40, (1, 2), "abs_smooth_quad_to"),
        (0x50, (1, 2), "rel_smooth_quad_to"),
        (0x60, (1, 2, 3, 4), "abs_quad_to"),
        (0x70, (1, 2, 3, 4), "rel_quad_to"),
        (0x80, (1, 2, 3, 4), "abs_smooth_cube_to"),
        (0x90, (1, 2, 3, 4), "rel_smooth_cube_to"),
        (0xA0, (1, 2, 3, 4, 5, 6), "abs_cube_to"),
        (0xB0, (1, 2, 3, 4, 5, 6), "rel_cube_to"),
        (0xE2, (1, 2), "close_path_abs_move_to"),
        (0xE3, (1, 2), "close_path_rel_move_to"),
        (0xE7, (1,), "rel_h_line_to"),
        (0xE8, (1,), "abs_v_line_to"),
        (0xE9, (1,), "rel_v_line_to"),
    ],
)
def test_drawing_instruction_operands(opcode: int, operands: tuple, method: str) -> None:
    receiver = _run(START + bytes([opcode]) + coords(*operands))
    assert receiver.calls[2:] == [(method, tuple(float(v) for v in operands))]


@pytest.mark.parametrize(
    ("flags", "large_arc", "sweep"),
    [(0, False, False), (1, True, False), (2, False, True), (3, True, True), (0x7C, False, False), (7, True, True)],
)
def test_arc_flags(flags: int, large_arc: bool, sweep: bool) -> None:
    receiver = _run(START + b"\xc0" + coords(4, 5, 30) + nat(flags) + coords(6, 7))
    assert receiver.calls[2:] == [("abs_arc_to", (4.0, 5.0, 30.0, large_arc, sweep, 6.0, 7.0))]


def test_relative_arc_repeats() -> None:
    arc = coords(1, 1, 0) + nat(2) + coords(2, 0)
    receiver = _run(START + b"\xd1" + arc + arc)
    assert receiver.calls[2:] == [("rel_arc_to", (1.0, 1.0, 0.0, False, True, 2.0, 0.0))] * 2


def test_close_path_end_path_returns_to_styling() -> None:
    receiver = _run(START + b"\xe1" + b"\xc1" + coords(3, 4) + b"\xe1")
    assert receiver.names() == ["reset", "start_path", "close_path_end_path", "start_path", "close_path_end_path"]


def test_drawing_opcode_in_styling_mode_is_rejected() -> None:
    receiver = RecordingReceiver()
    with pytest.raises(UnsupportedStylingOpcode):
        decode(graphic(body=START + b"\xe1" + b"\x00" + coords(1, 1)), receiver)
    assert receiver.names() == ["reset", "start_path", "close_path_end_path"]


@pytest.mark.parametrize("opcode", [0x00, 0x10, 0xBF, 0xC7, 0xC8, 0xE1, 0xFF])
def test_unsupported_styling_opcodes(opcode: int) -> None:
    receiver = RecordingReceiver()
    with pytest.raises(UnsupportedStylingOpcode):
        decode(graphic(body=bytes([opcode]) + coords(0, 0, 0, 0)), receiver)
    assert receiver.names() == ["reset"]


@pytest.mark.parametrize("opcode", [0xE0, 0xE4, 0xE5, 0xEA, 0xF0, 0xFF])
def test_unsupported_drawing_opcodes(opcode: int) -> None:
    receiver = RecordingReceiver()
    with pytest.raises(UnsupportedDrawingOpcode):
        decode(graphic(body=START + bytes([opcode]) + coords(0, 0, 0, 0)), receiver)
    assert receiver.names() == ["reset", "start_path"]


def test_repetitions_already_delivered_survive_a_failure() -> None:
    receiver = RecordingReceiver()
    with pytest.raises(InvalidNumber):
        decode(graphic(body=START + b"\x01" + coords(1, 2, 3)), receiver)
    assert receiver.calls[2:] == [("abs_line_to", (1.0, 2.0))]


def test_truncated_arc_flags() -> None:
    receiver = RecordingReceiver()
    with pytest.raises(InvalidNumber):
        decode(graphic(body=START + b"\xc0" + coords(1, 1, 0) + b"\x01"), receiver)
    assert receiver.names() == ["reset", "start_path"]


def test_decoding_without_receiver_still_validates() -> None:
    decode(graphic(body=START + b"\x00" + coords(1, 1)))
    with pytest.raises(InvalidNumber):
        decode(graphic(body=START + b"\x00" + coords(1)))


def test_truncated_prefixes_never_emit_partial_instructions() -> None:
    body = (
        START
        + b"\x01"
        + coords(1, 2, 100.5, -3)
        + b"\xa0"
        + coords(1, 2, 3, 4, 5, 6)
        + b"\xc0"
        + coords(2, 2, 45)
        + nat(1)
        + coords(7, 7)
        + b"\xe3"
        + coords(1, 1)
        + b"\xe1"
    )
    data = graphic(view_box_chunk(-8, -8, 8, 8), body=body)
    full = RecordingReceiver()
    decode(data, full)

    failures = 0
    for cut in range(len(data)):
        receiver = RecordingReceiver()
        try:
            decode(data[:cut], receiver)
        except IconVGError:
            failures += 1
        assert receiver.calls == full.calls[: len(receiver.calls)]
    assert failures > 0


def test_every_drawing_byte_is_handled() -> None:
    padding = coords(*([0] * 16)) + b"\x00" * 4
    for opcode in range(256):
        try:
            decode(graphic(body=START + bytes([opcode]) + padding), RecordingReceiver())
        except IconVGError:
            pass


def test_mode_step_functions() -> None:
    mode, src = decode_styling(Cursor(START), None)
    assert mode is Mode.DRAWING
    assert len(src) == 0

    mode, src = decode_drawing(Cursor(b"\xe1\x00"), None)
    assert mode is Mode.STYLING
    assert len(src) == 1

    mode, src = decode_drawing(Cursor(b"\xe6" + coords(5)), None)
    assert mode is Mode.DRAWING


def test_disassemble() -> None:
    data = graphic(body=START + b"\x01" + coords(3, 4, 5, 6) + b"\xe1")
    pad = " " * 14
    assert disassemble(data).splitlines() == [
        "89 49 56 47   Magic identifier",
        "00" + pad[2:] + "Number of metadata chunks: 0",
        "c0" + pad[2:] + "Start path, filled with CREG[CSEL-0]; M (absolute moveTo)",
        "82" + pad[2:] + "    +1",
        "84" + pad[2:] + "    +2",
        "01" + pad[2:] + "L (absolute lineTo), 2 reps",
        "86" + pad[2:] + "    +3",
        "88" + pad[2:] + "    +4",
        pad + "L (absolute lineTo), implicit",
        "8a" + pad[2:] + "    +5",
        "8c" + pad[2:] + "    +6",
        "e1" + pad[2:] + "z (closePath); end path",
    ]


def test_disassemble_arc_flags() -> None:
    text = disassemble(graphic(body=START + b"\xd0" + coords(1, 1, 0) + nat(3) + coords(2, 0)))
    assert "a (relative arcTo), 1 reps" in text
    assert "    0x3 (largeArc=1, sweep=1)" in text


def test_disassemble_raises_on_bad_input() -> None:
    with pytest.raises(UnsupportedDrawingOpcode):
        disassemble(graphic(body=START + b"\xe0"))


def test_truncated_operand_is_not_traced() -> None:
    logger = TraceLogger()
    with pytest.raises(InvalidNumber):
        decode(graphic(body=b"\xc0" + coords(1) + b"\x03\x00"), trace=logger)
    assert logger.lines[-1][14:] == "    +1"
    assert not any(line.startswith("03 00") for line in logger.lines)


def test_recording_receiver_is_a_receiver() -> None:
    receiver = RecordingReceiver()
    assert isinstance(receiver, Receiver)
    receiver.abs_line_to(1.0, 2.0)
    receiver.reset(None)
    assert receiver.calls == [("abs_line_to", (1.0, 2.0)), ("reset", (None,))]
    assert receiver.names() == ["abs_line_to", "reset"]
    with pytest.raises(AttributeError):
        receiver.draw_circle
