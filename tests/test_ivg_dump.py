from pathlib import Path

import ivg_dump
from iconvg import TraceLogger, disassemble

from ivg_bytes import coords, graphic, view_box_chunk


def _write_icon(tmp_path: Path) -> Path:
    source = tmp_path / "icon.ivg"
    body = b"\xc0" + coords(0, 0) + b"\x00" + coords(1, 1) + b"\xe1"
    source.write_bytes(graphic(view_box_chunk(-4, -2, 4, 2), body=body))
    return source


def test_metadata_summary(tmp_path: Path, capsys) -> None:
    assert ivg_dump.main([str(_write_icon(tmp_path)), "--metadata"]) == 0
    out = capsys.readouterr().out
    assert "view box: (-4, -2)-(+4, +2)" in out
    assert "size: 8 x 4" in out
    assert "palette: 64 entries, 1 distinct" in out


def test_disassembly_to_stdout(tmp_path: Path, capsys) -> None:
    assert ivg_dump.main([str(_write_icon(tmp_path))]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "89 49 56 47   Magic identifier"
    assert out.splitlines()[-1].endswith("z (closePath); end path")


def test_disassembly_to_file(tmp_path: Path, capsys) -> None:
    output = tmp_path / "logs" / "icon.txt"
    assert ivg_dump.main([str(_write_icon(tmp_path)), "--output", str(output)]) == 0
    text = output.read_text(encoding="utf-8")
    assert "Metadata Identifier: 0 (viewBox)" in text
    assert "[+] Disassembly written to" in capsys.readouterr().out


def test_errors_exit_nonzero(tmp_path: Path, capsys) -> None:
    source = tmp_path / "bad.ivg"
    source.write_bytes(graphic(body=b"\xc0" + coords(0, 0) + b"\xff"))
    assert ivg_dump.main([str(source)]) == 1
    assert "[error] iconvg: unsupported drawing opcode 0xff" in capsys.readouterr().err
    assert ivg_dump.main([str(tmp_path / "missing.ivg")]) == 1


def test_trace_logger_flush_requires_destination(tmp_path: Path) -> None:
    logger = TraceLogger()
    logger(b"\x00", "Number of metadata chunks: 0")
    assert logger.text() == "00            Number of metadata chunks: 0\n"
    target = logger.flush(tmp_path / "trace.txt")
    assert target.read_text(encoding="utf-8") == logger.text()


def test_stdout_matches_disassemble(tmp_path: Path, capsys) -> None:
    source = _write_icon(tmp_path)
    assert ivg_dump.main([str(source)]) == 0
    assert capsys.readouterr().out == disassemble(source.read_bytes())
