"""Polar plots of an angle column against one or more radius columns."""

from tablecharts.polar.polar_chart import AngleUnit, PolarFigureBuilder, PolarSeries, PolarState, polar_series

__all__ = [
    "AngleUnit",
    "PolarFigureBuilder",
    "PolarSeries",
    "PolarState",
    "polar_series",
]
