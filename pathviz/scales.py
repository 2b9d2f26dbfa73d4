from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
import math
from typing import Any, Callable, ClassVar, Literal, Protocol

from pathviz.errors import PlotConfigError

ScaleKind = Literal["linear", "discrete", "interval", "point"]


class Scale(Protocol):
    """Callable mapping from a domain value to a range value.

    Discrete-family scales return ``None`` for keys outside their domain;
    only ``LinearScale`` offers ``invert``.
    """

    kind: ClassVar[str]
    is_discrete: ClassVar[bool]
    domain: tuple[Any, ...]
    range: tuple[Any, ...]

    def __call__(self, value: Any) -> Any:
        ...


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``; NaN passes through unchanged."""
    if math.isnan(value):
        return value
    return min(upper, max(lower, value))


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    kind: ClassVar[str] = "linear"
    is_discrete: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if self.domain[0] == self.domain[1]:
            raise PlotConfigError(f"linear scale domain must not be degenerate: {self.domain!r}")

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        v = clamp(float(value), min(d0, d1), max(d0, d1))
        return r0 + (r1 - r0) * (v - d0) / (d1 - d0)

    def invert(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            raise PlotConfigError("cannot invert a linear scale with an empty range")
        v = clamp(float(value), min(r0, r1), max(r0, r1))
        return d0 + (v - r0) * (d1 - d0) / (r1 - r0)


@dataclass(frozen=True)
class DiscreteScale:
    domain: tuple[Hashable, ...]
    range: tuple[Any, ...]
    _positions: dict[Hashable, int] = field(init=False, repr=False, compare=False)

    kind: ClassVar[str] = "discrete"
    is_discrete: ClassVar[bool] = True

    def __post_init__(self) -> None:
        positions: dict[Hashable, int] = {}
        for index, key in enumerate(self.domain):
            # Repeated keys resolve to their last position.
            positions[key] = index
        object.__setattr__(self, "_positions", positions)

    def __call__(self, value: Any) -> Any:
        try:
            index = self._positions.get(value)
        except TypeError:
            return None
        if index is None or not self.range:
            return None
        return self.range[index % len(self.range)]

    def __contains__(self, value: Any) -> bool:
        try:
            return value in self._positions
        except TypeError:
            return False


@dataclass(frozen=True)
class IntervalScale:
    """Equal-width bands with an outer ``margin`` and an inner ``spacing``.

    Both are fractions of one band width. ``scale(key)`` is the left edge of
    the key's band; ``step`` is the band width.
    """

    domain: tuple[Hashable, ...]
    range: tuple[float, float]
    margin: float = 0.0
    spacing: float = 0.0
    step: float = field(init=False)
    _lookup: DiscreteScale = field(init=False, repr=False, compare=False)

    kind: ClassVar[str] = "interval"
    is_discrete: ClassVar[bool] = True

    def __post_init__(self) -> None:
        margin = clamp(float(self.margin), 0.0, 1.0)
        spacing = clamp(float(self.spacing), 0.0, 1.0)
        count = len(self.domain)
        r0, r1 = self.range
        step = 0.0
        if count > 0:
            step = (r1 - r0) / (2 * margin + (count - 1) * spacing + count)
        edges = tuple(r0 + step * (margin + i * spacing + i) for i, _ in enumerate(self.domain))
        object.__setattr__(self, "margin", margin)
        object.__setattr__(self, "spacing", spacing)
        object.__setattr__(self, "step", step)
        object.__setattr__(self, "_lookup", DiscreteScale(domain=self.domain, range=edges))

    def __call__(self, value: Any) -> float | None:
        return self._lookup(value)

    def band(self, value: Any) -> tuple[float, float] | None:
        left = self._lookup(value)
        if left is None:
            return None
        return (left, left + self.step)


@dataclass(frozen=True)
class PointScale:
    """Evenly spaced points inside ``range`` with a single outer ``margin``."""

    domain: tuple[Hashable, ...]
    range: tuple[float, float]
    margin: float = 0.0
    step: float = field(init=False)
    _lookup: DiscreteScale = field(init=False, repr=False, compare=False)

    kind: ClassVar[str] = "point"
    is_discrete: ClassVar[bool] = True

    def __post_init__(self) -> None:
        margin = clamp(float(self.margin), 0.0, 1.0)
        r0, r1 = self.range
        slots = 2 * margin + len(self.domain) - 1
        # A lone point without margin has no spacing to derive; it sits at range[0].
        step = (r1 - r0) / slots if slots > 0 else 0.0
        positions = tuple(r0 + step * (margin + i) for i, _ in enumerate(self.domain))
        object.__setattr__(self, "margin", margin)
        object.__setattr__(self, "step", step)
        object.__setattr__(self, "_lookup", DiscreteScale(domain=self.domain, range=positions))

    def __call__(self, value: Any) -> float | None:
        return self._lookup(value)


def linear(*, domain: Sequence[float], range: Sequence[float], zero: bool = False) -> LinearScale:
    d0, d1 = _numeric_pair(domain, "domain")
    if zero:
        if d0 <= d1:
            d0, d1 = min(0.0, d0), max(0.0, d1)
        else:
            d0, d1 = max(0.0, d0), min(0.0, d1)
    return LinearScale(domain=(d0, d1), range=_numeric_pair(range, "range"))


def discrete(*, domain: Sequence[Hashable], range: Sequence[Any]) -> DiscreteScale:
    return DiscreteScale(domain=tuple(domain), range=tuple(range))


def interval(
    *,
    domain: Sequence[Hashable],
    range: Sequence[float],
    margin: float = 0.0,
    spacing: float = 0.0,
) -> IntervalScale:
    return IntervalScale(
        domain=tuple(domain),
        range=_numeric_pair(range, "range"),
        margin=margin,
        spacing=spacing,
    )


def point(*, domain: Sequence[Hashable], range: Sequence[float], margin: float = 0.0) -> PointScale:
    return PointScale(domain=tuple(domain), range=_numeric_pair(range, "range"), margin=margin)


_BUILDERS: dict[str, Callable[..., Any]] = {
    "linear": linear,
    "discrete": discrete,
    "interval": interval,
    "point": point,
}

SCALE_OPTIONS = ("domain", "range", "zero", "margin", "spacing")
_KIND_OPTIONS: dict[str, tuple[str, ...]] = {
    "linear": ("domain", "range", "zero"),
    "discrete": ("domain", "range"),
    "interval": ("domain", "range", "margin", "spacing"),
    "point": ("domain", "range", "margin"),
}


def build_scale(kind: str, **options: Any) -> Scale:
    """Build a scale from the option set shared by every kind.

    Options a kind has no use for (``spacing`` on a point scale, ``zero`` on
    an interval scale) are ignored; names outside ``SCALE_OPTIONS`` are not.
    """
    builder = _BUILDERS.get(kind)
    if builder is None:
        raise PlotConfigError(f"unsupported scale kind: {kind}")
    unknown = sorted(set(options) - set(SCALE_OPTIONS))
    if unknown:
        raise PlotConfigError(f"unknown scale option(s): {', '.join(unknown)}")
    for required in ("domain", "range"):
        if required not in options:
            raise PlotConfigError(f"{kind} scale needs `{required}`")
    used = {key: value for key, value in options.items() if key in _KIND_OPTIONS[kind]}
    return builder(**used)


def _numeric_pair(values: Sequence[float], label: str) -> tuple[float, float]:
    if isinstance(values, (str, bytes)) or len(values) != 2:
        raise PlotConfigError(f"{label} must be a pair of numbers, got {values!r}")
    try:
        return (float(values[0]), float(values[1]))
    except (TypeError, ValueError) as exc:
        raise PlotConfigError(f"{label} must be a pair of numbers, got {values!r}") from exc
