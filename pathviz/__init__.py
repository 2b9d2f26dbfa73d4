from pathviz.accessors import field
from pathviz.axis import axis, compute_ticks, layout_axis, render_axis
from pathviz.config import build_chart, load_chart_config, parse_chart_config
from pathviz.curves import CatmullRomCurve, LinearCurve, create_curve
from pathviz.errors import PlotConfigError, PlotDataError, PlotError
from pathviz.geoms import PlotArea
from pathviz.path import PathBuilder, circle, polyline, rectangle
from pathviz.plot import create_plot
from pathviz.render import ElementTreeTarget, RenderTarget
from pathviz.scales import (
    DiscreteScale,
    IntervalScale,
    LinearScale,
    PointScale,
    build_scale,
    discrete,
    interval,
    linear,
    point,
)
from pathviz.ticks import nice_number, ticks

__all__ = [
    "CatmullRomCurve",
    "DiscreteScale",
    "ElementTreeTarget",
    "IntervalScale",
    "LinearCurve",
    "LinearScale",
    "PathBuilder",
    "PlotArea",
    "PlotConfigError",
    "PlotDataError",
    "PlotError",
    "PointScale",
    "RenderTarget",
    "axis",
    "build_chart",
    "build_scale",
    "circle",
    "compute_ticks",
    "create_curve",
    "create_plot",
    "discrete",
    "field",
    "interval",
    "layout_axis",
    "linear",
    "load_chart_config",
    "nice_number",
    "parse_chart_config",
    "point",
    "polyline",
    "rectangle",
    "render_axis",
    "ticks",
]
