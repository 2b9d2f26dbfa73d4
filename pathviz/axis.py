from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Literal

import numpy as np

from pathviz.errors import PlotConfigError
from pathviz.geoms import Geom, PlotArea, attr_value
from pathviz.path import polyline
from pathviz.render.target import RenderTarget
from pathviz.scales import Scale
from pathviz.ticks import format_ticks_for_axis, ticks

LOGGER = logging.getLogger(__name__)

Orientation = Literal["top", "bottom", "left", "right"]
ORIENTATIONS: tuple[str, ...] = ("top", "bottom", "left", "right")

DEFAULT_TICK_COUNT = 5
DEFAULT_GRID_OPACITY = 0.2

Segment = tuple[tuple[float, float], tuple[float, float]]


@dataclass(frozen=True)
class AxisTick:
    value: Any
    label: str
    position: float
    label_x: float
    label_y: float
    text_anchor: str
    baseline: str
    tick_line: Segment
    grid_line: Segment


@dataclass(frozen=True)
class AxisLayout:
    orientation: str
    line: Segment
    ticks: tuple[AxisTick, ...]


def compute_ticks(scale: Scale, count: int = DEFAULT_TICK_COUNT) -> list[Any]:
    """Representative values for an axis: the domain itself for discrete scales."""
    if scale.is_discrete:
        return list(scale.domain)
    lo, hi = min(scale.domain), max(scale.domain)
    values = ticks(lo, hi, count)
    return [float(v) for v in values if lo <= v <= hi]


def _labels(scale: Scale, values: list[Any]) -> list[str]:
    if scale.is_discrete:
        return [str(v) for v in values]
    return format_ticks_for_axis(np.asarray(values, dtype=np.float64))


def layout_axis(
    scale: Scale,
    orientation: str,
    area: PlotArea,
    *,
    count: int = DEFAULT_TICK_COUNT,
    tick_size: float = 6.0,
    label_padding: float = 4.0,
) -> AxisLayout:
    if orientation not in ORIENTATIONS:
        raise PlotConfigError(f"axis orientation must be one of {ORIENTATIONS}, got {orientation!r}")
    w, h = area.width, area.height
    values = compute_ticks(scale, count)
    labels = _labels(scale, values)
    # Interval scales map a key to its band's left edge; labels sit mid-band.
    offset = scale.step / 2 if scale.kind == "interval" else 0.0
    reach = tick_size + label_padding

    out: list[AxisTick] = []
    for value, label in zip(values, labels):
        resolved = scale(value)
        if not isinstance(resolved, (int, float)):
            LOGGER.debug("axis tick %r has no position; skipped", value)
            continue
        p = float(resolved) + offset
        if orientation == "bottom":
            anchor, baseline = "middle", "hanging"
            label_xy = (p, h + reach)
            tick_line: Segment = ((p, h), (p, h + tick_size))
            grid_line: Segment = ((p, 0.0), (p, h))
        elif orientation == "top":
            anchor, baseline = "middle", "auto"
            label_xy = (p, -reach)
            tick_line = ((p, 0.0), (p, -tick_size))
            grid_line = ((p, 0.0), (p, h))
        elif orientation == "left":
            anchor, baseline = "end", "middle"
            label_xy = (-reach, p)
            tick_line = ((0.0, p), (-tick_size, p))
            grid_line = ((0.0, p), (w, p))
        else:
            anchor, baseline = "start", "middle"
            label_xy = (w + reach, p)
            tick_line = ((w, p), (w + tick_size, p))
            grid_line = ((0.0, p), (w, p))
        out.append(
            AxisTick(
                value=value,
                label=label,
                position=p,
                label_x=label_xy[0],
                label_y=label_xy[1],
                text_anchor=anchor,
                baseline=baseline,
                tick_line=tick_line,
                grid_line=grid_line,
            )
        )

    axis_line: Segment = {
        "bottom": ((0.0, h), (w, h)),
        "top": ((0.0, 0.0), (w, 0.0)),
        "left": ((0.0, 0.0), (0.0, h)),
        "right": ((w, 0.0), (w, h)),
    }[orientation]
    return AxisLayout(orientation=orientation, line=axis_line, ticks=tuple(out))


def render_axis(
    target: RenderTarget,
    parent: Any,
    scale: Scale,
    orientation: str,
    area: PlotArea,
    *,
    count: int = DEFAULT_TICK_COUNT,
    grid: bool = False,
    color: str = "#000",
    font_size: float = 12,
    tick_size: float = 6.0,
    label_padding: float = 4.0,
) -> AxisLayout:
    layout = layout_axis(
        scale,
        orientation,
        area,
        count=count,
        tick_size=tick_size,
        label_padding=label_padding,
    )
    grid_opacity = 1.0 if grid else DEFAULT_GRID_OPACITY

    group = target.create_element("g", parent)
    target.set_attribute(group, "class", f"axis axis-{orientation}")
    _segment(target, group, layout.line, color, "axis-line")
    for tick in layout.ticks:
        gridline = _segment(target, group, tick.grid_line, color, "axis-grid")
        target.set_attribute(gridline, "stroke-opacity", attr_value(grid_opacity))
        _segment(target, group, tick.tick_line, color, "axis-tick")
        label = target.create_element("text", group)
        target.set_attribute(label, "class", "axis-label")
        target.set_attribute(label, "x", attr_value(tick.label_x))
        target.set_attribute(label, "y", attr_value(tick.label_y))
        target.set_attribute(label, "text-anchor", tick.text_anchor)
        target.set_attribute(label, "dominant-baseline", tick.baseline)
        target.set_attribute(label, "fill", color)
        target.set_attribute(label, "font-size", attr_value(font_size))
        target.set_text(label, tick.label)
    return layout


def axis(
    scale: Scale,
    orientation: str = "bottom",
    *,
    count: int = DEFAULT_TICK_COUNT,
    grid: bool = False,
    color: str = "#000",
    font_size: float = 12,
) -> Geom:
    if orientation not in ORIENTATIONS:
        raise PlotConfigError(f"axis orientation must be one of {ORIENTATIONS}, got {orientation!r}")

    def draw(target: RenderTarget, parent: Any, area: PlotArea) -> None:
        render_axis(
            target,
            parent,
            scale,
            orientation,
            area,
            count=count,
            grid=grid,
            color=color,
            font_size=font_size,
        )

    return draw


def _segment(target: RenderTarget, parent: Any, segment: Segment, color: str, css_class: str) -> Any:
    element = target.create_element("path", parent)
    target.set_attribute(element, "class", css_class)
    target.set_attribute(element, "d", polyline(list(segment)))
    target.set_attribute(element, "fill", "none")
    target.set_attribute(element, "stroke", color)
    return element
