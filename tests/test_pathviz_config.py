from __future__ import annotations

import contextlib
import importlib.util
import io
from pathlib import Path
import sys
import tempfile
import tomllib
import unittest
import xml.etree.ElementTree as ET

from pathviz import PlotConfigError, build_chart, load_chart_config, parse_chart_config
from pathviz.render import ElementTreeTarget

ROOT = Path(__file__).resolve().parents[1]
MODULE_PATH = ROOT / "main.py"
SPEC = importlib.util.spec_from_file_location("pathviz_cli_main", MODULE_PATH)
if SPEC is None or SPEC.loader is None:
    raise RuntimeError(f"failed to load module spec for {MODULE_PATH}")
CLI = importlib.util.module_from_spec(SPEC)
sys.modules[SPEC.name] = CLI
SPEC.loader.exec_module(CLI)

CHART = """
[plot]
width = 240
height = 140
margin = 20
title = "Weekly"

[scales.x]
kind = "point"
domain = "field:day"
range = "width"

[scales.y]
domain = "field:value"
range = "height"
zero = true

[[geoms]]
kind = "curve"
x = { field = "day", scale = "x" }
y = { field = "value", scale = "y" }
curve = "catmull"
stroke_color = "steelblue"

[[geoms]]
kind = "point"
x = { field = "day", scale = "x" }
y = { field = "value", scale = "y" }
fill = "steelblue"

[[axes]]
scale = "x"
orientation = "bottom"

[[axes]]
scale = "y"
orientation = "left"
ticks = 4
grid = true
"""

DATA = [
    {"day": "mon", "value": 10},
    {"day": "tue", "value": 30},
    {"day": "wed", "value": 20},
]

DATA_JSON = '[{"day": "mon", "value": 10}, {"day": "tue", "value": 30}, {"day": "wed", "value": 20}]'


class LoadChartConfigTests(unittest.TestCase):
    def test_load_and_parse(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.toml"
            path.write_text(CHART, encoding="utf-8")
            config = load_chart_config(path)
        self.assertEqual(config.plot.width, 240.0)
        self.assertEqual(config.plot.margin, 20.0)
        self.assertEqual(config.plot.title, "Weekly")
        self.assertEqual([s.name for s in config.scales], ["x", "y"])
        self.assertEqual(config.scales[1].kind, "linear")
        self.assertEqual([g.kind for g in config.geoms], ["curve", "point"])
        self.assertEqual(config.axes[1].ticks, 4)
        self.assertTrue(config.axes[1].grid)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_chart_config("/nonexistent/chart.toml")

    def test_invalid_toml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.toml"
            path.write_text("[plot\nwidth = ", encoding="utf-8")
            with self.assertRaises(PlotConfigError):
                load_chart_config(path)

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"legend": {}})
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"plot": {"colour": "red"}})
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"scales": {"x": {"domain": [0, 1], "range": [0, 1], "base": 10}}})

    def test_references_must_name_known_scales(self) -> None:
        geom = {"kind": "point", "x": {"field": "a", "scale": "nope"}}
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"geoms": [geom]})
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"axes": [{"scale": "nope"}]})

    def test_invalid_geom_and_axis_settings(self) -> None:
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"geoms": [{"kind": "pie"}]})
        scales = {"x": {"domain": [0, 1], "range": "width"}}
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"scales": scales, "axes": [{"scale": "x", "orientation": "middle"}]})
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"scales": scales, "axes": [{"scale": "x", "ticks": 1}]})

    def test_scale_requires_domain_and_range(self) -> None:
        with self.assertRaises(PlotConfigError):
            parse_chart_config({"scales": {"x": {"domain": [0, 1]}}})


class BuildChartTests(unittest.TestCase):
    def _build(self) -> ET.Element:
        config = parse_chart_config(tomllib.loads(CHART))
        return build_chart(config, DATA, ElementTreeTarget())

    def test_scene_layout(self) -> None:
        scene = self._build()
        self.assertEqual(scene.tag, "svg")
        self.assertEqual(scene.get("width"), "240")
        self.assertEqual(scene.find("title").text, "Weekly")
        content = scene.find("g")
        self.assertEqual(content.get("transform"), "translate(20,20)")
        self.assertEqual(len(content.findall("g")), 4)

    def test_scales_resolve_against_data_and_area(self) -> None:
        scene = self._build()
        circles = list(scene.iter("circle"))
        self.assertEqual([c.get("cx") for c in circles], ["0", "100", "200"])
        self.assertEqual(circles[1].get("cy"), "0")
        self.assertEqual(circles[1].get("fill"), "steelblue")

        curve_path = scene.find("g").findall("g")[0].find("path")
        self.assertTrue(curve_path.get("d").startswith("M0,"))
        self.assertIn("C", curve_path.get("d"))

    def test_axes_are_drawn(self) -> None:
        scene = self._build()
        groups = {g.get("class"): g for g in scene.iter("g") if g.get("class")}
        self.assertEqual(set(groups), {"axis axis-bottom", "axis axis-left"})
        self.assertEqual([t.text for t in groups["axis axis-bottom"].findall("text")], ["mon", "tue", "wed"])
        self.assertEqual([t.text for t in groups["axis axis-left"].findall("text")], ["0", "20"])

    def test_geom_option_errors_surface_as_config_errors(self) -> None:
        config = parse_chart_config({"geoms": [{"kind": "point", "colour": "red"}]})
        with self.assertRaises(PlotConfigError):
            build_chart(config, DATA, ElementTreeTarget())

    def test_scale_tables_share_one_option_set(self) -> None:
        raw = {
            "scales": {
                "x": {"kind": "point", "domain": ["a", "b"], "range": "width", "margin": 0.5, "spacing": 0.2},
                "y": {"domain": [0, 10], "range": "height", "margin": 0.5, "zero": True},
            },
            "geoms": [{"kind": "point", "per_datum": False, "x": 1, "y": 1}],
        }
        scene = build_chart(parse_chart_config(raw), DATA, ElementTreeTarget())
        self.assertEqual(len(list(scene.iter("circle"))), 1)

    def test_non_numeric_linear_field_domain(self) -> None:
        config = parse_chart_config({"scales": {"x": {"domain": "field:day", "range": "width"}}})
        with self.assertRaises(PlotConfigError):
            build_chart(config, DATA, ElementTreeTarget())


class CliTests(unittest.TestCase):
    def test_ticks_command(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            CLI.main(["ticks", "0", "100"])
        self.assertEqual(out.getvalue().strip(), "0 20 40 60 80 100")

    def test_ticks_command_tight(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            CLI.main(["ticks", "3", "97", "--tight"])
        self.assertEqual(out.getvalue().strip(), "3 20 40 60 80 97")

    def test_render_command_writes_svg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            chart = Path(tmp) / "chart.toml"
            chart.write_text(CHART, encoding="utf-8")
            data = Path(tmp) / "data.json"
            data.write_text(DATA_JSON, encoding="utf-8")
            svg = Path(tmp) / "out" / "chart.svg"
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                CLI.main(["render", str(chart), "--data", str(data), "--out", str(svg)])
            self.assertIn("wrote", out.getvalue())
            root = ET.parse(svg).getroot()
        self.assertTrue(root.tag.endswith("svg"))
        self.assertEqual(root.get("height"), "140")

    def test_render_to_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            chart = Path(tmp) / "chart.toml"
            chart.write_text('[plot]\nwidth = 50\nheight = 50\n[[geoms]]\nkind = "point"\nper_datum = false\n', encoding="utf-8")
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                CLI.main(["render", str(chart)])
        markup = out.getvalue().strip()
        self.assertTrue(markup.startswith("<svg"))
        self.assertIn("<circle", markup)


if __name__ == "__main__":
    unittest.main()
