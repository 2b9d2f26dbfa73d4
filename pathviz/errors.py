from __future__ import annotations


class PlotError(Exception):
    """Base class for pathviz errors."""


class PlotDataError(PlotError):
    """Raised when series or record input cannot be interpreted."""


class PlotConfigError(PlotError, ValueError):
    """Raised when scale, geom or chart-file options are invalid."""
