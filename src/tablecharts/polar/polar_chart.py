"""Polar plots of results-table columns.

One angle column is plotted against one or more radius columns, each radius
column becoming its own go.Scatterpolar trace.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

import numpy as np
import plotly.graph_objects as go

from tablecharts.boxplot.errors import EmptyConfigurationError, InvalidConfigurationError
from tablecharts.boxplot.tabular_source import TabularSource
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)


class AngleUnit(Enum):
    DEGREES = "degrees"
    RADIANS = "radians"


@dataclass
class PolarState:
    """Column selection and display options for one polar plot."""
    angle_column: str = ""
    radius_columns: list[str] = field(default_factory=list)
    angle_unit: AngleUnit = AngleUnit.DEGREES  # unit of the values in angle_column
    fill: bool = False                          # fill each trace to the origin
    title: str = ""
    show_legend: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "angle_column": self.angle_column,
            "radius_columns": list(self.radius_columns),
            "angle_unit": self.angle_unit.value,
            "fill": self.fill,
            "title": self.title,
            "show_legend": self.show_legend,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolarState":
        radius_columns = data.get("radius_columns")
        if not isinstance(radius_columns, list):
            radius_columns = []
        try:
            angle_unit = AngleUnit(data.get("angle_unit", AngleUnit.DEGREES.value))
        except ValueError:
            logger.warning(f"Unknown angle_unit {data.get('angle_unit')!r}, using degrees")
            angle_unit = AngleUnit.DEGREES
        return cls(
            angle_column=str(data.get("angle_column", "")),
            radius_columns=[str(c) for c in radius_columns],
            angle_unit=angle_unit,
            fill=bool(data.get("fill", False)),
            title=str(data.get("title", "")),
            show_legend=bool(data.get("show_legend", True)),
        )


@dataclass(frozen=True)
class PolarSeries:
    """Angles (degrees) and radii for one radius column, in table row order."""
    name: str
    angles: tuple[float, ...]
    radii: tuple[float, ...]


def polar_series(
    source: TabularSource,
    angle_column: str,
    radius_columns: Sequence[str],
    *,
    angle_unit: AngleUnit = AngleUnit.DEGREES,
) -> list[PolarSeries]:
    """Read angle/radius pairs from the table.

    Angles are returned in degrees. NaN cells are kept.

    Raises:
        EmptyConfigurationError: If no radius column is selected.
        InvalidConfigurationError: If a selected column does not exist.
    """
    if not radius_columns:
        raise EmptyConfigurationError("No radius columns selected, nothing to plot")
    headings = source.column_headings()
    missing = [c for c in [angle_column, *radius_columns] if c not in headings]
    if missing:
        raise InvalidConfigurationError(f"Polar plot columns not found: {missing}")

    n_rows = source.row_count()
    angles = [source.numeric_value(angle_column, r) for r in range(n_rows)]
    if angle_unit is AngleUnit.RADIANS:
        angles = [math.degrees(a) for a in angles]

    out: list[PolarSeries] = []
    for col in dict.fromkeys(radius_columns):
        radii = tuple(source.numeric_value(col, r) for r in range(n_rows))
        out.append(PolarSeries(name=col, angles=tuple(angles), radii=radii))
    return out


class PolarFigureBuilder:
    """Generates Plotly polar figures from a TabularSource and PolarState."""

    def __init__(self, state: PolarState) -> None:
        self.state = state

    def make_figure(self, source: TabularSource) -> go.Figure:
        series = polar_series(
            source,
            self.state.angle_column,
            self.state.radius_columns,
            angle_unit=self.state.angle_unit,
        )
        fig = go.Figure()
        min_r = max_r = 0.0
        for s in series:
            fig.add_trace(go.Scatterpolar(
                r=list(s.radii),
                theta=list(s.angles),
                name=s.name,
                mode="lines+markers",
                fill="toself" if self.state.fill else "none",
                marker=dict(size=5),
            ))
            finite = np.asarray(s.radii, dtype=float)
            finite = finite[np.isfinite(finite)]
            if finite.size:
                min_r = min(min_r, float(finite.min()))
                max_r = max(max_r, float(finite.max()))

        # radial range always spans 0 and every finite radius
        if min_r == max_r == 0.0:
            radial_range = [0.0, 1.0]
        else:
            radial_range = [min_r * 1.05, max_r * 1.05]

        fig.update_layout(
            title_text=self.state.title,
            showlegend=self.state.show_legend,
            polar=dict(
                angularaxis=dict(direction="counterclockwise", rotation=0),
                radialaxis=dict(range=radial_range),
            ),
            margin=dict(l=40, r=40, t=40 if self.state.title else 20, b=20),
        )
        return fig

    def make_figure_dict(self, source: TabularSource) -> dict:
        return self.make_figure(source).to_dict()
