from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


def format_number(value: float) -> str:
    """Format a path operand the way SVG readers expect (``10`` not ``10.0``)."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


@dataclass(frozen=True)
class PathCommand:
    opcode: str
    operands: tuple[float, ...] = ()

    def __str__(self) -> str:
        return self.opcode + ",".join(format_number(v) for v in self.operands)


class PathBuilder:
    """Append-only accumulator of SVG path commands.

    Command order is not validated: a ``line`` before any ``move`` still
    serializes, it just draws nothing useful.
    """

    def __init__(self) -> None:
        self._commands: list[PathCommand] = []

    @property
    def commands(self) -> tuple[PathCommand, ...]:
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def move(self, x: float, y: float) -> None:
        self._push("M", x, y)

    def line(self, x: float, y: float) -> None:
        self._push("L", x, y)

    def h_line(self, x: float) -> None:
        self._push("H", x)

    def v_line(self, y: float) -> None:
        self._push("V", y)

    def arc(
        self,
        rx: float,
        ry: float,
        rotation_deg: float,
        large_arc: int,
        sweep: int,
        x: float,
        y: float,
    ) -> None:
        """Elliptical arc to ``(x, y)``.

        ``large_arc`` picks the large (1) or small (0) arc, ``sweep`` the
        clockwise (1) or anticlockwise (0) one.
        """
        self._push("A", rx, ry, rotation_deg, large_arc, sweep, x, y)

    def quadratic_curve(self, x1: float, y1: float, x: float, y: float) -> None:
        self._push("Q", x1, y1, x, y)

    def bezier_curve(self, x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> None:
        self._push("C", x1, y1, x2, y2, x, y)

    def close(self) -> None:
        self._push("Z")

    def to_string(self) -> str:
        return " ".join(str(command) for command in self._commands)

    def __str__(self) -> str:
        return self.to_string()

    def _push(self, opcode: str, *operands: float) -> None:
        self._commands.append(PathCommand(opcode=opcode, operands=tuple(operands)))


def polyline(points: Sequence[Sequence[float]] | None, closed: bool = False) -> str:
    path = PathBuilder()
    if points is not None and len(points) > 0:
        first = points[0]
        path.move(first[0], first[1])
        for x, y, *_ in points[1:]:
            path.line(x, y)
        if closed:
            path.close()
    return path.to_string()


def rectangle(x: float, y: float, width: float, height: float, radius: float | None = None) -> str:
    if not radius or width < 2 * radius or height < 2 * radius:
        return polyline(
            [(x, y), (x + width, y), (x + width, y + height), (x, y + height)],
            closed=True,
        )
    r = radius
    path = PathBuilder()
    path.move(x + r, y)
    path.h_line(x + width - r)
    path.arc(r, r, 0, 0, 1, x + width, y + r)
    path.v_line(y + height - r)
    path.arc(r, r, 0, 0, 1, x + width - r, y + height)
    path.h_line(x + r)
    path.arc(r, r, 0, 0, 1, x, y + height - r)
    path.v_line(y + r)
    path.arc(r, r, 0, 0, 1, x + r, y)
    path.close()
    return path.to_string()


def circle(x: float, y: float, radius: float) -> str:
    path = PathBuilder()
    path.move(x - radius, y)
    path.arc(radius, radius, 0, 1, 1, x + radius, y)
    path.arc(radius, radius, 0, 1, 1, x - radius, y)
    path.close()
    return path.to_string()
