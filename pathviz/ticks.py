from __future__ import annotations

import numpy as np

TICK_DECIMALS = 8
LABEL_MAX_DECIMALS = 12
LABEL_SIGNIFICANT_DIGITS = 6
SCIENTIFIC_ABOVE = 1e6


def nice_number(value: float, *, round_result: bool) -> float:
    """Return a 1/2/5/10 multiple of a power of ten close to ``value``.

    With ``round_result`` the nearest ladder value is picked (used for step
    sizes); without it the smallest ladder value not below the normalized
    fraction is picked (used for the overall span). ``value`` must be finite
    and non-zero.
    """
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def ticks(start: float, end: float, count: int, tight: bool = False) -> np.ndarray:
    """Generate roughly ``count`` round-number ticks covering ``[start, end]``.

    Values are ascending regardless of argument order. In ``tight`` mode only
    the generated values strictly inside ``(start, end)`` are kept and the
    exact endpoints are pinned at both ends.
    """
    if count < 2:
        raise ValueError("tick count must be >= 2")
    if start == end:
        return np.asarray([start], dtype=np.float64)
    if end < start:
        return ticks(end, start, count, tight)

    span = nice_number(end - start, round_result=False)
    step = nice_number(span / (count - 1), round_result=True)
    tick_min = np.floor(start / step) * step
    tick_max = np.ceil(end / step) * step

    steps = int(np.rint((tick_max - tick_min) / step))
    values = tick_min + np.arange(steps + 1, dtype=np.float64) * step
    # Snap accumulated float drift; adding 0.0 turns -0.0 into 0.0.
    values = np.round(values, TICK_DECIMALS) + 0.0

    if tight:
        interior = values[(values > start) & (values < end)]
        return np.concatenate(([start], interior, [end])).astype(np.float64)
    return values


def format_tick(value: float, *, step: float | None = None) -> str:
    """Axis label text for one tick.

    With a ``step`` every label carries the decimals that step needs, so a
    tick set reads uniformly; values within float noise of zero print as
    ``0``. Exponent notation is kept for magnitudes of a million and up and
    for steps too fine to print in ``LABEL_MAX_DECIMALS`` places.
    """
    if not np.isfinite(value):
        return str(value)
    has_step = step is not None and np.isfinite(step) and step > 0
    if has_step and abs(value) <= step * 1e-9:
        value = 0.0
    if value == 0:
        return "0"

    if has_step:
        decimals = _decimals_from_step(step)
        if abs(value) >= SCIENTIFIC_ABOVE or decimals > LABEL_MAX_DECIMALS:
            return f"{value:.4e}"
        out = np.format_float_positional(value, precision=decimals, unique=False, trim="-")
    else:
        if abs(value) >= SCIENTIFIC_ABOVE or abs(value) < 10.0**-LABEL_MAX_DECIMALS:
            return f"{value:.4e}"
        out = np.format_float_positional(
            value, precision=LABEL_SIGNIFICANT_DIGITS, unique=False, fractional=False, trim="-"
        )
    return "0" if out == "-0" else out


def format_ticks_for_axis(values: np.ndarray) -> list[str]:
    if values.size == 0:
        return []
    if values.size == 1:
        return [format_tick(float(values[0]))]
    # Tight tick sets are uneven at the ends; the smallest gap sets the precision.
    gap = float(np.min(np.abs(np.diff(values))))
    step = gap if gap > 0 else None
    return [format_tick(float(v), step=step) for v in values]


def _decimals_from_step(step: float) -> int:
    # Drift in a computed gap (0.0003 - 0.0002) is rounded off before counting.
    text = np.format_float_positional(
        step, precision=LABEL_SIGNIFICANT_DIGITS, unique=False, fractional=False, trim="-"
    )
    _, _, fraction = text.partition(".")
    return len(fraction)
