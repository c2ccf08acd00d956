from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

from .metadata import Metadata


class Receiver:
    """
    Sink for the actions decoded from an IconVG graphic.

    ``reset`` is the first method called (if any). No methods are called at all
    when the input is rejected before the metadata is fully decoded. Every
    other method receives exactly the operands decoded for one instruction, in
    wire order, and only after all of them decoded successfully.

    The base implementation ignores everything; subclasses override what they
    need.
    """

    def reset(self, metadata: Metadata) -> None:
        pass

    def start_path(self, adj: int, x: float, y: float) -> None:
        pass

    def close_path_end_path(self) -> None:
        pass

    def close_path_abs_move_to(self, x: float, y: float) -> None:
        pass

    def close_path_rel_move_to(self, x: float, y: float) -> None:
        pass

    def abs_h_line_to(self, x: float) -> None:
        pass

    def rel_h_line_to(self, x: float) -> None:
        pass

    def abs_v_line_to(self, y: float) -> None:
        pass

    def rel_v_line_to(self, y: float) -> None:
        pass

    def abs_line_to(self, x: float, y: float) -> None:
        pass

    def rel_line_to(self, x: float, y: float) -> None:
        pass

    def abs_smooth_quad_to(self, x: float, y: float) -> None:
        pass

    def rel_smooth_quad_to(self, x: float, y: float) -> None:
        pass

    def abs_quad_to(self, x1: float, y1: float, x: float, y: float) -> None:
        pass

    def rel_quad_to(self, x1: float, y1: float, x: float, y: float) -> None:
        pass

    def abs_smooth_cube_to(self, x2: float, y2: float, x: float, y: float) -> None:
        pass

    def rel_smooth_cube_to(self, x2: float, y2: float, x: float, y: float) -> None:
        pass

    def abs_cube_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        pass

    def rel_cube_to(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        pass

    def abs_arc_to(
        self,
        rx: float,
        ry: float,
        x_axis_rotation: float,
        large_arc: bool,
        sweep: bool,
        x: float,
        y: float,
    ) -> None:
        pass

    def rel_arc_to(
        self,
        rx: float,
        ry: float,
        x_axis_rotation: float,
        large_arc: bool,
        sweep: bool,
        x: float,
        y: float,
    ) -> None:
        pass


RECEIVER_METHODS = frozenset(name for name in vars(Receiver) if not name.startswith("_"))


@dataclass
class RecordingReceiver(Receiver):
    """Receiver that keeps every call as ``(method_name, args)`` in call order."""

    calls: List[Tuple[str, Tuple[Any, ...]]] = field(default_factory=list)

    def __getattribute__(self, name: str) -> Any:
        if name not in RECEIVER_METHODS:
            return super().__getattribute__(name)
        calls = super().__getattribute__("calls")

        def record(*args: Any) -> None:
            calls.append((name, args))

        return record

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]
