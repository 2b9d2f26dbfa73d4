from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from pathviz import ElementTreeTarget, axis, create_plot, field, linear
from pathviz import geoms

LOGGER = logging.getLogger(__name__)


def build_samples(count: int) -> list[dict[str, float]]:
    # Coarse samples so the spline and the polyline visibly differ.
    t = np.linspace(0.0, 4.0 * np.pi, count, dtype=np.float64)
    y = np.sin(t) * np.exp(-t / 8.0)
    return [{"t": float(a), "y": float(b)} for a, b in zip(t, y)]


def render(out: Path, count: int = 14) -> Path:
    samples = build_samples(count)
    width, height, margin = 720, 360, 40
    x = linear(domain=[samples[0]["t"], samples[-1]["t"]], range=[0, width - 2 * margin])
    y = linear(domain=[-1, 1], range=[height - 2 * margin, 0])

    target = ElementTreeTarget()
    scene = create_plot(
        target,
        width=width,
        height=height,
        margin=margin,
        title="Damped sine",
        geoms=[
            axis(y, "left", grid=True),
            axis(x, "bottom"),
            geoms.x_rule(y=y(0)),
            geoms.curve(samples, x=field("t", x), y=field("y", y), stroke_color="#bbb"),
            geoms.curve(samples, x=field("t", x), y=field("y", y), curve="catmull-rom", stroke_color="#d62728", stroke_width=2),
            geoms.point(samples, x=field("t", x), y=field("y", y), fill="#d62728", radius=3),
        ],
    )
    path = target.write(out, scene)
    LOGGER.info("wrote %s (%d samples)", path, count)
    return path


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a sampled signal with linear and Catmull-Rom curves.")
    parser.add_argument("--out", type=Path, default=Path("sampled_signal.svg"))
    parser.add_argument("--samples", type=int, default=14)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    print(render(args.out, args.samples))


if __name__ == "__main__":
    main()
