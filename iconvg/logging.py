from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

# Called with the exact bytes a decode step consumed and a description of them.
Trace = Callable[[bytes, str], None]

HEX_COLUMN_WIDTH = 14


def format_trace_line(span: bytes, description: str) -> str:
    """Render ``span`` as hex in a fixed-width column followed by ``description``."""

    hex_bytes = " ".join(f"{b:02x}" for b in span)
    return f"{hex_bytes:<{HEX_COLUMN_WIDTH}}{description}"


@dataclass
class TraceLogger:
    """Collects decoder trace lines and optionally writes them to ``destination``."""

    destination: Optional[Path] = None
    lines: List[str] = field(default_factory=list)

    def __call__(self, span: bytes, description: str) -> None:
        self.lines.append(format_trace_line(span, description))

    def text(self) -> str:
        return "\n".join(self.lines) + ("\n" if self.lines else "")

    def flush(self, destination: Optional[Path] = None) -> Path:
        target = destination or self.destination
        if target is None:
            raise ValueError("TraceLogger.flush needs a destination path")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.text(), encoding="utf-8")
        return target
