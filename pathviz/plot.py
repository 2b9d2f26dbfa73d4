from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pathviz.geoms import Geom, PlotArea, attr_value
from pathviz.render.target import SVG_NAMESPACE, RenderTarget

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 500


def plot_area(width: float, height: float, margin: float = 0) -> PlotArea:
    if width <= 0 or height <= 0:
        raise ValueError("plot width/height must be > 0")
    if margin < 0:
        raise ValueError("plot margin must be >= 0")
    inner_w = width - 2 * margin
    inner_h = height - 2 * margin
    if inner_w <= 0 or inner_h <= 0:
        raise ValueError("plot margin leaves no drawable area")
    return PlotArea(width=inner_w, height=inner_h)


def create_plot(
    target: RenderTarget,
    *,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    margin: float = 0,
    geoms: Sequence[Geom] = (),
    title: str | None = None,
    parent: Any | None = None,
) -> Any:
    """Build an ``svg`` element with one group per geom inside the margins."""
    area = plot_area(width, height, margin)

    scene = target.create_element("svg", parent)
    target.set_attribute(scene, "xmlns", SVG_NAMESPACE)
    target.set_attribute(scene, "width", attr_value(width))
    target.set_attribute(scene, "height", attr_value(height))
    target.set_attribute(scene, "style", "user-select: none")
    if title:
        title_element = target.create_element("title", scene)
        target.set_text(title_element, title)

    content = target.create_element("g", scene)
    target.set_attribute(content, "transform", f"translate({attr_value(margin)},{attr_value(margin)})")
    for geom in geoms:
        geom(target, target.create_element("g", content), area)
    return scene
