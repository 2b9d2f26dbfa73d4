from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
import tomllib
from typing import Any

from pathviz.accessors import FieldAccessor
from pathviz.adapters.records import distinct_values, normalize_records
from pathviz.axis import DEFAULT_TICK_COUNT, ORIENTATIONS, axis
from pathviz.errors import PlotConfigError
from pathviz.geoms import GEOMS, Geom, PlotArea
from pathviz.plot import DEFAULT_HEIGHT, DEFAULT_WIDTH, create_plot, plot_area
from pathviz.render.target import RenderTarget
from pathviz.scales import SCALE_OPTIONS, Scale, build_scale

LOGGER = logging.getLogger(__name__)

FIELD_DOMAIN_PREFIX = "field:"

_TOP_LEVEL_KEYS = {"plot", "scales", "geoms", "axes"}
_PLOT_KEYS = {"width", "height", "margin", "title"}
_SCALE_KEYS = {"kind", *SCALE_OPTIONS}
_AXIS_KEYS = {"scale", "orientation", "ticks", "grid"}


@dataclass(frozen=True)
class PlotSection:
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    margin: float = 0
    title: str | None = None


@dataclass(frozen=True)
class ScaleSpec:
    name: str
    kind: str
    options: dict[str, Any]


@dataclass(frozen=True)
class GeomSpec:
    kind: str
    options: dict[str, Any]
    per_datum: bool = True


@dataclass(frozen=True)
class AxisSpec:
    scale: str
    orientation: str = "bottom"
    ticks: int = DEFAULT_TICK_COUNT
    grid: bool = False


@dataclass(frozen=True)
class ChartConfig:
    plot: PlotSection = field(default_factory=PlotSection)
    scales: tuple[ScaleSpec, ...] = ()
    geoms: tuple[GeomSpec, ...] = ()
    axes: tuple[AxisSpec, ...] = ()


def load_chart_config(path: str | Path) -> ChartConfig:
    chart_path = Path(path)
    if not chart_path.exists():
        raise FileNotFoundError(f"chart file not found: {chart_path}")
    with chart_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise PlotConfigError(f"invalid chart file {chart_path}: {exc}") from exc
    config = parse_chart_config(raw)
    LOGGER.debug(
        "loaded chart %s: %d scales, %d geoms, %d axes",
        chart_path,
        len(config.scales),
        len(config.geoms),
        len(config.axes),
    )
    return config


def parse_chart_config(raw: Mapping[str, Any]) -> ChartConfig:
    _reject_unknown(raw, _TOP_LEVEL_KEYS, "chart")
    plot = _parse_plot(raw.get("plot", {}))

    scales_raw = raw.get("scales", {})
    if not isinstance(scales_raw, Mapping):
        raise PlotConfigError("`scales` must be a table of named scales")
    scales = tuple(_parse_scale(name, body) for name, body in scales_raw.items())
    known = {spec.name for spec in scales}

    geoms = tuple(_parse_geom(body, known) for body in _table_list(raw.get("geoms", []), "geoms"))
    axes = tuple(_parse_axis(body, known) for body in _table_list(raw.get("axes", []), "axes"))
    return ChartConfig(plot=plot, scales=scales, geoms=geoms, axes=axes)


def build_chart(config: ChartConfig, data: Any, target: RenderTarget, *, parent: Any | None = None) -> Any:
    """Resolve scales against the data and plot area, then draw every geom and axis."""
    section = config.plot
    area = plot_area(section.width, section.height, section.margin)
    records = normalize_records(data) or []

    scales = {spec.name: _build_scale(spec, area, records) for spec in config.scales}
    layers: list[Geom] = [_build_geom(spec, scales, records) for spec in config.geoms]
    for spec in config.axes:
        layers.append(axis(scales[spec.scale], spec.orientation, count=spec.ticks, grid=spec.grid))
    return create_plot(
        target,
        width=section.width,
        height=section.height,
        margin=section.margin,
        geoms=layers,
        title=section.title,
        parent=parent,
    )


def _parse_plot(raw: Any) -> PlotSection:
    if not isinstance(raw, Mapping):
        raise PlotConfigError("`plot` must be a table")
    _reject_unknown(raw, _PLOT_KEYS, "plot")
    width = _positive_number(raw.get("width", DEFAULT_WIDTH), "plot.width")
    height = _positive_number(raw.get("height", DEFAULT_HEIGHT), "plot.height")
    margin = raw.get("margin", 0)
    if isinstance(margin, bool) or not isinstance(margin, (int, float)) or margin < 0:
        raise PlotConfigError("`plot.margin` must be a non-negative number")
    title = raw.get("title")
    if title is not None and not isinstance(title, str):
        raise PlotConfigError("`plot.title` must be a string")
    return PlotSection(width=width, height=height, margin=float(margin), title=title)


def _parse_scale(name: str, raw: Any) -> ScaleSpec:
    if not isinstance(raw, Mapping):
        raise PlotConfigError(f"scale `{name}` must be a table")
    _reject_unknown(raw, _SCALE_KEYS, f"scales.{name}")
    kind = raw.get("kind", "linear")
    for required in ("domain", "range"):
        if required not in raw:
            raise PlotConfigError(f"scale `{name}` is missing `{required}`")
    options = {key: value for key, value in raw.items() if key != "kind"}
    return ScaleSpec(name=name, kind=str(kind), options=options)


def _parse_geom(raw: Mapping[str, Any], known_scales: set[str]) -> GeomSpec:
    kind = raw.get("kind")
    if kind not in GEOMS:
        raise PlotConfigError(f"unsupported geom kind: {kind!r}")
    per_datum = raw.get("per_datum", True)
    if not isinstance(per_datum, bool):
        raise PlotConfigError("`per_datum` must be a boolean")
    options: dict[str, Any] = {}
    for key, value in raw.items():
        if key in ("kind", "per_datum"):
            continue
        if isinstance(value, Mapping):
            _check_field_option(kind, key, value, known_scales)
        options[key] = value
    return GeomSpec(kind=kind, options=options, per_datum=per_datum)


def _check_field_option(kind: str, key: str, value: Mapping[str, Any], known_scales: set[str]) -> None:
    _reject_unknown(value, {"field", "scale"}, f"{kind}.{key}")
    if not isinstance(value.get("field"), str):
        raise PlotConfigError(f"`{kind}.{key}.field` must be a string")
    scale = value.get("scale")
    if scale is not None and scale not in known_scales:
        raise PlotConfigError(f"`{kind}.{key}` refers to unknown scale {scale!r}")


def _parse_axis(raw: Mapping[str, Any], known_scales: set[str]) -> AxisSpec:
    _reject_unknown(raw, _AXIS_KEYS, "axes")
    scale = raw.get("scale")
    if scale not in known_scales:
        raise PlotConfigError(f"axis refers to unknown scale {scale!r}")
    orientation = raw.get("orientation", "bottom")
    if orientation not in ORIENTATIONS:
        raise PlotConfigError(f"axis orientation must be one of {ORIENTATIONS}, got {orientation!r}")
    count = raw.get("ticks", DEFAULT_TICK_COUNT)
    if isinstance(count, bool) or not isinstance(count, int) or count < 2:
        raise PlotConfigError("axis `ticks` must be an integer >= 2")
    grid = raw.get("grid", False)
    if not isinstance(grid, bool):
        raise PlotConfigError("axis `grid` must be a boolean")
    return AxisSpec(scale=scale, orientation=orientation, ticks=count, grid=grid)


def _build_scale(spec: ScaleSpec, area: PlotArea, records: Sequence[Any]) -> Scale:
    options = dict(spec.options)
    options["range"] = _resolve_range(options["range"], area, spec.name)
    domain = options["domain"]
    if isinstance(domain, str):
        options["domain"] = _resolve_field_domain(spec, domain, records)
    return build_scale(spec.kind, **options)


def _resolve_range(value: Any, area: PlotArea, name: str) -> Any:
    if value == "width":
        return (0.0, area.width)
    if value == "height":
        # SVG y grows downward; larger values should sit higher.
        return (area.height, 0.0)
    if isinstance(value, str):
        raise PlotConfigError(f"scale `{name}` range must be a list, 'width' or 'height'")
    return value


def _resolve_field_domain(spec: ScaleSpec, domain: str, records: Sequence[Any]) -> Any:
    if not domain.startswith(FIELD_DOMAIN_PREFIX):
        raise PlotConfigError(f"scale `{spec.name}` domain must be a list or '{FIELD_DOMAIN_PREFIX}<name>'")
    name = domain[len(FIELD_DOMAIN_PREFIX):]
    values = distinct_values(records, name)
    if spec.kind != "linear":
        return values
    try:
        numbers = [float(v) for v in values]
    except (TypeError, ValueError) as exc:
        raise PlotConfigError(f"scale `{spec.name}` domain field {name!r} is not numeric") from exc
    if not numbers:
        raise PlotConfigError(f"scale `{spec.name}` domain field {name!r} has no values")
    return (min(numbers), max(numbers))


def _build_geom(spec: GeomSpec, scales: Mapping[str, Scale], records: Sequence[Any]) -> Geom:
    options: dict[str, Any] = {}
    for key, value in spec.options.items():
        if isinstance(value, Mapping):
            scale_name = value.get("scale")
            options[key] = FieldAccessor(
                name=value["field"],
                scale=scales[scale_name] if scale_name is not None else None,
            )
        else:
            options[key] = value
    data = records if spec.per_datum else None
    try:
        return GEOMS[spec.kind](data, **options)
    except TypeError as exc:
        raise PlotConfigError(f"invalid options for {spec.kind} geom: {exc}") from exc


def _table_list(raw: Any, label: str) -> list[Mapping[str, Any]]:
    if not isinstance(raw, list) or not all(isinstance(item, Mapping) for item in raw):
        raise PlotConfigError(f"`{label}` must be an array of tables")
    return raw


def _reject_unknown(raw: Mapping[str, Any], allowed: set[str], label: str) -> None:
    for key in raw:
        if key not in allowed:
            raise PlotConfigError(f"unknown key in {label}: {key}")


def _positive_number(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise PlotConfigError(f"`{label}` must be a positive number")
    return float(value)
