from __future__ import annotations

from dataclasses import dataclass
import logging
from numbers import Real
from typing import Any, Callable, Sequence

from pathviz.accessors import Accessor, resolve_accessor
from pathviz.adapters.records import normalize_records
from pathviz.curves import Curve, create_curve
from pathviz.errors import PlotConfigError
from pathviz.path import PathBuilder, circle as circle_path, format_number, polyline, rectangle as rectangle_path
from pathviz.render.target import RenderTarget

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlotArea:
    """Drawable size inside the plot margins."""

    width: float
    height: float


Geom = Callable[[RenderTarget, Any, PlotArea], None]


def attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Real):
        return format_number(value)
    return str(value)


def _each_datum(data: Any, fn: Callable[[Any, int], None]) -> None:
    records = normalize_records(data)
    if records is None:
        fn(None, 0)
        return
    for index, datum in enumerate(records):
        fn(datum, index)


def _positions(datum: Any, index: int, accessors: Sequence[Accessor]) -> list[Any] | None:
    values = [accessor(datum, index) for accessor in accessors]
    if any(v is None for v in values):
        LOGGER.debug("skipping datum %d: position resolved to no value", index)
        return None
    return values


def _styled(accessor: Accessor, datum: Any, index: int, default: Any) -> str:
    value = accessor(datum, index)
    return attr_value(default if value is None else value)


def _set_stroke(
    target: RenderTarget,
    element: Any,
    datum: Any,
    index: int,
    stroke_color: Accessor,
    stroke_width: Accessor,
) -> None:
    target.set_attribute(element, "stroke", _styled(stroke_color, datum, index, "#000"))
    target.set_attribute(element, "stroke-width", _styled(stroke_width, datum, index, 1))


def point(data: Any = None, *, x: Any = None, y: Any = None, fill: Any = None, radius: Any = None) -> Geom:
    get_x, get_y = resolve_accessor(x, 0), resolve_accessor(y, 0)
    get_fill, get_radius = resolve_accessor(fill, "#000"), resolve_accessor(radius, 2)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, (get_x, get_y))
            if pos is None:
                return
            element = target.create_element("circle", parent)
            target.set_attribute(element, "cx", attr_value(pos[0]))
            target.set_attribute(element, "cy", attr_value(pos[1]))
            target.set_attribute(element, "fill", _styled(get_fill, datum, index, "#000"))
            target.set_attribute(element, "r", _styled(get_radius, datum, index, 2))

        _each_datum(data, build)

    return draw


def rectangle(
    data: Any = None,
    *,
    x: Any = None,
    y: Any = None,
    width: Any = None,
    height: Any = None,
    radius: Any = None,
    fill: Any = None,
    stroke_color: Any = None,
    stroke_width: Any = None,
) -> Geom:
    getters = tuple(resolve_accessor(opt, 0) for opt in (x, y, width, height))
    get_radius = resolve_accessor(radius, 0)
    get_fill = resolve_accessor(fill, "transparent")
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, getters)
            if pos is None:
                return
            element = target.create_element("path", parent)
            r = get_radius(datum, index)
            target.set_attribute(element, "d", rectangle_path(*pos, radius=r))
            target.set_attribute(element, "fill", _styled(get_fill, datum, index, "transparent"))
            _set_stroke(target, element, datum, index, get_stroke, get_stroke_width)

        _each_datum(data, build)

    return draw


def circle(
    data: Any = None,
    *,
    x: Any = None,
    y: Any = None,
    radius: Any = None,
    fill: Any = None,
    stroke_color: Any = None,
    stroke_width: Any = None,
) -> Geom:
    getters = tuple(resolve_accessor(opt, 0) for opt in (x, y, radius))
    get_fill = resolve_accessor(fill, "transparent")
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, getters)
            if pos is None:
                return
            element = target.create_element("path", parent)
            target.set_attribute(element, "d", circle_path(*pos))
            target.set_attribute(element, "fill", _styled(get_fill, datum, index, "transparent"))
            _set_stroke(target, element, datum, index, get_stroke, get_stroke_width)

        _each_datum(data, build)

    return draw


def text(
    data: Any = None,
    *,
    x: Any = None,
    y: Any = None,
    text: Any = None,
    rotation: Any = None,
    text_anchor: Any = None,
    baseline: Any = None,
    fill: Any = None,
    size: Any = None,
) -> Geom:
    get_x, get_y = resolve_accessor(x, 0), resolve_accessor(y, 0)
    get_text = resolve_accessor(text, "")
    get_rotation = resolve_accessor(rotation) if rotation is not None else None
    get_anchor, get_baseline = resolve_accessor(text_anchor, "middle"), resolve_accessor(baseline, "middle")
    get_fill, get_size = resolve_accessor(fill, "#000"), resolve_accessor(size, 16)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, (get_x, get_y))
            if pos is None:
                return
            px, py = attr_value(pos[0]), attr_value(pos[1])
            element = target.create_element("text", parent)
            target.set_attribute(element, "x", px)
            target.set_attribute(element, "y", py)
            target.set_text(element, _styled(get_text, datum, index, ""))
            if get_rotation is not None:
                angle = _styled(get_rotation, datum, index, 0)
                target.set_attribute(element, "transform", f"rotate({angle}, {px}, {py})")
            target.set_attribute(element, "text-anchor", _styled(get_anchor, datum, index, "middle"))
            target.set_attribute(element, "dominant-baseline", _styled(get_baseline, datum, index, "middle"))
            target.set_attribute(element, "fill", _styled(get_fill, datum, index, "#000"))
            target.set_attribute(element, "font-size", _styled(get_size, datum, index, 16))

        _each_datum(data, build)

    return draw


def _stroked_path(
    target: RenderTarget,
    parent: Any,
    d: str,
    datum: Any,
    index: int,
    stroke_color: Accessor,
    stroke_width: Accessor,
) -> Any:
    element = target.create_element("path", parent)
    target.set_attribute(element, "d", d)
    target.set_attribute(element, "fill", "none")
    _set_stroke(target, element, datum, index, stroke_color, stroke_width)
    return element


def line(
    data: Any = None,
    *,
    x1: Any = None,
    y1: Any = None,
    x2: Any = None,
    y2: Any = None,
    stroke_color: Any = None,
    stroke_width: Any = None,
) -> Geom:
    getters = tuple(resolve_accessor(opt, 0) for opt in (x1, y1, x2, y2))
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, getters)
            if pos is None:
                return
            d = polyline([(pos[0], pos[1]), (pos[2], pos[3])])
            _stroked_path(target, parent, d, datum, index, get_stroke, get_stroke_width)

        _each_datum(data, build)

    return draw


def x_rule(data: Any = None, *, y: Any = None, stroke_color: Any = None, stroke_width: Any = None) -> Geom:
    """Horizontal rule spanning the plot width at ``y``."""
    get_y = resolve_accessor(y, 0)
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, (get_y,))
            if pos is None:
                return
            d = polyline([(0, pos[0]), (area.width, pos[0])])
            _stroked_path(target, parent, d, datum, index, get_stroke, get_stroke_width)

        _each_datum(data, build)

    return draw


def y_rule(data: Any = None, *, x: Any = None, stroke_color: Any = None, stroke_width: Any = None) -> Geom:
    """Vertical rule spanning the plot height at ``x``."""
    get_x = resolve_accessor(x, 0)
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        def build(datum: Any, index: int) -> None:
            pos = _positions(datum, index, (get_x,))
            if pos is None:
                return
            d = polyline([(pos[0], 0), (pos[0], area.height)])
            _stroked_path(target, parent, d, datum, index, get_stroke, get_stroke_width)

        _each_datum(data, build)

    return draw


def _feed(curve_obj: Curve, records: Sequence[Any], indices: Sequence[int], get_x: Accessor, get_y: Accessor) -> None:
    for index in indices:
        pos = _positions(records[index], index, (get_x, get_y))
        if pos is not None:
            curve_obj.point(float(pos[0]), float(pos[1]))
    curve_obj.end()


def _curve_kind(get_curve: Accessor, first: Any) -> str:
    kind = get_curve(first, 0)
    if kind is None:
        return "linear"
    if not isinstance(kind, str):
        raise PlotConfigError(f"curve kind must be a string, got {kind!r}")
    return kind


def curve(
    data: Any,
    *,
    x: Any = None,
    y: Any = None,
    curve: Any = None,
    stroke_color: Any = None,
    stroke_width: Any = None,
) -> Geom:
    """Single path through all records, joined linearly or with a Catmull-Rom spline.

    ``curve`` may be an accessor; it is resolved once, against the first record.
    """
    get_x, get_y = resolve_accessor(x, 0), resolve_accessor(y, 0)
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)
    get_curve = resolve_accessor(curve, "linear")

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        records = normalize_records(data) or []
        first = records[0] if records else None
        path = PathBuilder()
        if len(records) >= 2:
            _feed(create_curve(_curve_kind(get_curve, first), path), records, range(len(records)), get_x, get_y)
        _stroked_path(target, parent, path.to_string(), first, 0, get_stroke, get_stroke_width)

    return draw


def area(
    data: Any,
    *,
    x1: Any = None,
    y1: Any = None,
    x2: Any = None,
    y2: Any = None,
    curve: Any = None,
    fill: Any = None,
    stroke_color: Any = None,
    stroke_width: Any = None,
) -> Geom:
    """Closed band: forward along ``(x1, y1)`` then back along ``(x2, y2)``."""
    get_x1, get_y1 = resolve_accessor(x1, 0), resolve_accessor(y1, 0)
    get_x2, get_y2 = resolve_accessor(x2, 0), resolve_accessor(y2, 0)
    get_fill = resolve_accessor(fill, "#000")
    get_stroke, get_stroke_width = resolve_accessor(stroke_color, "#000"), resolve_accessor(stroke_width, 1)
    get_curve = resolve_accessor(curve, "linear")

    def draw(target: RenderTarget, parent: Any, plot_area: PlotArea) -> None:
        records = normalize_records(data) or []
        first = records[0] if records else None
        path = PathBuilder()
        if len(records) >= 2:
            shape = create_curve(_curve_kind(get_curve, first), path)
            _feed(shape, records, range(len(records)), get_x1, get_y1)
            _feed(shape, records, range(len(records) - 1, -1, -1), get_x2, get_y2)
            path.close()
        element = target.create_element("path", parent)
        target.set_attribute(element, "d", path.to_string())
        target.set_attribute(element, "fill", _styled(get_fill, first, 0, "#000"))
        _set_stroke(target, element, first, 0, get_stroke, get_stroke_width)

    return draw


GEOMS: dict[str, Callable[..., Geom]] = {
    "text": text,
    "point": point,
    "rectangle": rectangle,
    "circle": circle,
    "line": line,
    "x_rule": x_rule,
    "y_rule": y_rule,
    "curve": curve,
    "area": area,
}
