from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from pathviz.adapters.records import pd
from pathviz.config import build_chart, load_chart_config
from pathviz.errors import PlotDataError
from pathviz.render import ElementTreeTarget
from pathviz.ticks import format_ticks_for_axis, ticks


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pathviz")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a TOML chart file to SVG.")
    render.add_argument("chart", type=Path)
    render.add_argument("--data", type=Path, default=None, help="Records as a JSON array or a CSV file (needs pandas).")
    render.add_argument("--out", type=Path, default=None, help="Output SVG path. Default: print to stdout.")

    tick = sub.add_parser("ticks", help="Print nice tick values for an interval.")
    tick.add_argument("start", type=float)
    tick.add_argument("end", type=float)
    tick.add_argument("--count", type=int, default=5)
    tick.add_argument("--tight", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        config = load_chart_config(args.chart)
        data = _load_data(args.data) if args.data is not None else None
        target = ElementTreeTarget()
        root = build_chart(config, data, target)
        if args.out is None:
            print(target.to_markup(root))
        else:
            out_path = target.write(args.out, root)
            print(f"wrote {out_path}")
        return

    if args.command == "ticks":
        if args.count < 2:
            raise SystemExit("--count must be >= 2")
        values = ticks(args.start, args.end, args.count, tight=args.tight)
        print(" ".join(format_ticks_for_axis(values)))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _load_data(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"data file not found: {path}")
    if path.suffix.lower() == ".csv":
        if pd is None:
            raise PlotDataError("pandas is required to read CSV data")
        return pd.read_csv(path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise PlotDataError("JSON data must be an array of records")
    return payload


if __name__ == "__main__":
    main()
