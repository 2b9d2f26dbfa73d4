from __future__ import annotations

from enum import Enum
import logging
from typing import Protocol

from pathviz.path import PathBuilder
from pathviz.scales import clamp

LOGGER = logging.getLogger(__name__)

DEFAULT_SMOOTHNESS = 0.5
CATMULL_ROM_KINDS = ("catmull", "catmull-rom")


class Curve(Protocol):
    """Point-stream consumer that emits commands into a ``PathBuilder``."""

    def point(self, x: float, y: float) -> None:
        ...

    def end(self) -> None:
        ...


class LinearCurve:
    def __init__(self, path: PathBuilder) -> None:
        self._path = path
        self._started = False

    def point(self, x: float, y: float) -> None:
        if self._started:
            self._path.line(x, y)
        else:
            self._path.move(x, y)
            self._started = True

    def end(self) -> None:
        return None


class _CatmullRomState(Enum):
    EMPTY = 0
    PRIMED = 1
    DRAWING = 2
    ENDED = 3


class CatmullRomCurve:
    """Catmull-Rom spline through the incoming points, emitted as cubic Béziers.

    The window holds the last three points; each new point draws the segment
    between the middle two. ``end()`` replays the last point so the final
    segment is drawn. Points fed after ``end()`` continue the same subpath
    with a straight join.
    """

    def __init__(self, path: PathBuilder, smoothness: float = DEFAULT_SMOOTHNESS) -> None:
        smoothness = clamp(float(smoothness), 0.0, 1.0)
        if not smoothness > 0.0:
            raise ValueError("catmull-rom smoothness must be in (0, 1]")
        self._path = path
        self._tension = smoothness * 12
        self._state = _CatmullRomState.EMPTY
        self._x0 = self._x1 = self._x2 = 0.0
        self._y0 = self._y1 = self._y2 = 0.0

    @property
    def tension(self) -> float:
        return self._tension

    def point(self, x: float, y: float) -> None:
        state = self._state
        if state is _CatmullRomState.EMPTY or state is _CatmullRomState.ENDED:
            if state is _CatmullRomState.EMPTY:
                self._path.move(x, y)
            else:
                self._path.line(x, y)
            self._x2, self._y2 = x, y
            self._state = _CatmullRomState.PRIMED
        elif state is _CatmullRomState.PRIMED:
            self._state = _CatmullRomState.DRAWING
        else:
            t = self._tension
            c1x = (-self._x0 + t * self._x1 + self._x2) / t
            c1y = (-self._y0 + t * self._y1 + self._y2) / t
            c2x = (self._x1 + t * self._x2 - x) / t
            c2y = (self._y1 + t * self._y2 - y) / t
            self._path.bezier_curve(c1x, c1y, c2x, c2y, self._x2, self._y2)
        self._x0, self._y0 = self._x1, self._y1
        self._x1, self._y1 = self._x2, self._y2
        self._x2, self._y2 = x, y

    def end(self) -> None:
        if self._state is _CatmullRomState.EMPTY:
            return
        if self._state is _CatmullRomState.DRAWING:
            self.point(self._x2, self._y2)
        self._state = _CatmullRomState.ENDED


def create_curve(kind: str | None, path: PathBuilder, *, smoothness: float = DEFAULT_SMOOTHNESS) -> Curve:
    if kind in CATMULL_ROM_KINDS:
        return CatmullRomCurve(path, smoothness=smoothness)
    if kind not in (None, "linear"):
        LOGGER.warning("unknown curve kind %r; using linear", kind)
    return LinearCurve(path)
