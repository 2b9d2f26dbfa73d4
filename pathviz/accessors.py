from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from pathviz.adapters.records import lookup_field
from pathviz.scales import Scale

Accessor = Callable[[Any, int], Any]


@dataclass(frozen=True)
class FieldAccessor:
    """Read ``name`` from a record, optionally passing it through a scale."""

    name: str
    scale: Scale | None = None

    def __call__(self, datum: Any, index: int) -> Any:
        value = lookup_field(datum, self.name)
        if value is None or self.scale is None:
            return value
        return self.scale(value)


@dataclass(frozen=True)
class Constant:
    value: Any

    def __call__(self, datum: Any, index: int) -> Any:
        return self.value


def field(name: str, scale: Scale | None = None) -> FieldAccessor:
    return FieldAccessor(name=name, scale=scale)


def resolve_accessor(option: Any, default: Any = None) -> Accessor:
    """Resolve a geom option once: callables are used as-is, anything else is a constant."""
    if option is None:
        return Constant(default)
    if callable(option):
        return option
    return Constant(option)
