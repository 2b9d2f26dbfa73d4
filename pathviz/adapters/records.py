from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pathviz.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_records(data: Any) -> list[Any] | None:
    """Turn geom input into a list of records.

    ``None`` means "no data": the geom draws one element from its options.
    Accepts sequences of records, a pandas DataFrame, or a mapping of
    equal-length columns.
    """
    if data is None:
        return None

    if pd is not None and isinstance(data, pd.DataFrame):
        return data.to_dict(orient="records")

    if isinstance(data, Mapping):
        return _records_from_columns(data)

    if isinstance(data, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported data input type: {type(data)!r}")

    if isinstance(data, Sequence):
        return list(data)

    if isinstance(data, Iterable):
        return list(data)

    raise PlotDataError(f"unsupported data input type: {type(data)!r}")


def distinct_values(records: Sequence[Any], name: str) -> list[Any]:
    """Ordered distinct values of a field, for building discrete domains."""
    seen: dict[Any, None] = {}
    for record in records:
        value = lookup_field(record, name)
        if value is None:
            continue
        try:
            seen.setdefault(value, None)
        except TypeError as exc:
            raise PlotDataError(f"field {name!r} holds unhashable value: {value!r}") from exc
    return list(seen)


def lookup_field(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _records_from_columns(columns: Mapping[str, Any]) -> list[dict[str, Any]]:
    lengths: dict[str, int] = {}
    for key, values in columns.items():
        if isinstance(values, (str, bytes, bytearray)) or not hasattr(values, "__len__"):
            raise PlotDataError(f"column {key!r} must be a sequence")
        lengths[key] = len(values)
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{key}={size}" for key, size in lengths.items())
        raise PlotDataError(f"column length mismatch: {detail}")
    size = next(iter(lengths.values()), 0)
    return [{key: columns[key][i] for key in columns} for i in range(size)]
