"""Boxplot dialog panel: column selection, options, and chart output.

The pure ``run_boxplot`` / ``run_polar`` helpers do all the work and return
either a figure dict or a status message; the panel only wires widgets to them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import plotly.graph_objects as go
from nicegui import ui

from tablecharts.boxplot.boxplot_state import BoxPoints, BoxplotState
from tablecharts.boxplot.column_ref import group_by_choices
from tablecharts.boxplot.errors import ChartConfigurationError
from tablecharts.boxplot.figure_builder import BoxFigureBuilder, export_html
from tablecharts.boxplot.group_assembler import assemble_groups
from tablecharts.boxplot.tabular_source import DataFrameSource
from tablecharts.chart_config import ChartConfig
from tablecharts.polar.polar_chart import AngleUnit, PolarFigureBuilder, PolarState
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)


def run_boxplot(source: DataFrameSource, state: BoxplotState) -> tuple[Optional[dict], str]:
    """Assemble and build a box figure; return (figure dict or None, status)."""
    try:
        dataset = assemble_groups(source, state.categories, state.group_by)
    except ChartConfigurationError as e:
        logger.warning(f"boxplot not created: {e}")
        return None, str(e)
    fig = BoxFigureBuilder(state).make_figure_dict(dataset)
    n_series = len(dataset.series_keys)
    status = f"{len(dataset.categories)} categories, {n_series} series, {source.row_count()} rows"
    return fig, status


def run_polar(source: DataFrameSource, state: PolarState) -> tuple[Optional[dict], str]:
    """Build a polar figure; return (figure dict or None, status)."""
    try:
        fig = PolarFigureBuilder(state).make_figure_dict(source)
    except ChartConfigurationError as e:
        logger.warning(f"polar plot not created: {e}")
        return None, str(e)
    return fig, f"{len(state.radius_columns)} radius columns, {source.row_count()} rows"


class BoxplotPanel:
    """Dialog-style panel for one results table.

    Attributes:
        source: Table being plotted.
        config: Persisted chart config; states are written back on each plot.
    """

    def __init__(self, source: DataFrameSource, *, config: Optional[ChartConfig] = None) -> None:
        self.source = source
        self.config = config
        self.box_state = config.get_boxplot_state() if config else BoxplotState()
        self.polar_state = config.get_polar_state() if config else PolarState()

        numeric = set(source.numeric_headings())
        self.box_state.categories = [c for c in self.box_state.categories if c in numeric]
        choices = self._group_by_choices()
        if self.box_state.group_by not in choices:
            self.box_state.group_by = choices[0]

        self._plot: Optional[ui.plotly] = None
        self._status: Optional[ui.label] = None
        self._last_figure: Optional[dict] = None

    def _group_by_choices(self) -> list[str]:
        return group_by_choices(
            self.source.column_headings(),
            has_labels=self.source.has_labels,
            label_heading=self.source.label_heading,
        )

    def _toggle_category(self, heading: str, checked: bool) -> None:
        cats = self.box_state.categories
        if checked and heading not in cats:
            cats.append(heading)
        elif not checked and heading in cats:
            cats.remove(heading)

    def _toggle_radius(self, heading: str, checked: bool) -> None:
        cols = self.polar_state.radius_columns
        if checked and heading not in cols:
            cols.append(heading)
        elif not checked and heading in cols:
            cols.remove(heading)

    def build(self, container: Optional[ui.element] = None) -> None:
        """Create widgets inside container (or the current context)."""
        if container is None:
            container = ui.column().classes("w-full")
        numeric = self.source.numeric_headings()
        with container:
            with ui.row().classes("w-full no-wrap gap-4"):
                with ui.column().classes("w-72 gap-1"):
                    with ui.expansion("Boxplot", value=True).classes("w-full"):
                        ui.label("Categories")
                        for heading in numeric:
                            ui.checkbox(
                                heading,
                                value=heading in self.box_state.categories,
                                on_change=lambda e, h=heading: self._toggle_category(h, e.value),
                            )
                        ui.select(self._group_by_choices(), label="Group by").bind_value(
                            self.box_state, "group_by"
                        ).classes("w-full")
                        ui.input("Title").bind_value(self.box_state, "title").classes("w-full")
                        ui.input("X label").bind_value(self.box_state, "x_label").classes("w-full")
                        ui.input("Y label").bind_value(self.box_state, "y_label").classes("w-full")
                        ui.checkbox("Legend").bind_value(self.box_state, "show_legend")
                        ui.checkbox("Mean").bind_value(self.box_state, "show_mean")
                        ui.checkbox("Horizontal").bind_value(self.box_state, "horizontal")
                        ui.select(
                            {p: p.value for p in BoxPoints},
                            label="Points",
                        ).bind_value(self.box_state, "box_points").classes("w-full")
                        ui.button("Plot", on_click=self.plot_boxplot)
                    with ui.expansion("Polar plot").classes("w-full"):
                        ui.select(numeric, label="Angle").bind_value(
                            self.polar_state, "angle_column"
                        ).classes("w-full")
                        ui.select(
                            {u: u.value for u in AngleUnit}, label="Angle unit"
                        ).bind_value(self.polar_state, "angle_unit").classes("w-full")
                        ui.label("Radius")
                        for heading in numeric:
                            ui.checkbox(
                                heading,
                                value=heading in self.polar_state.radius_columns,
                                on_change=lambda e, h=heading: self._toggle_radius(h, e.value),
                            )
                        ui.checkbox("Fill").bind_value(self.polar_state, "fill")
                        ui.button("Plot", on_click=self.plot_polar)
                    ui.button("Export HTML", on_click=self.export)
                with ui.column().classes("flex-1 min-w-0"):
                    self._status = ui.label("").classes("text-sm")
                    self._plot = ui.plotly({}).classes("w-full h-[600px]")

    def _show(self, fig: Optional[dict], status: str) -> None:
        if self._status is not None:
            self._status.text = status
            self._status.classes(
                replace="text-sm text-negative" if fig is None else "text-sm"
            )
        if fig is None:
            return
        self._last_figure = fig
        if self._plot is not None:
            self._plot.update_figure(fig)

    def _save_config(self) -> None:
        if self.config is None:
            return
        self.config.set_boxplot_state(self.box_state)
        self.config.set_polar_state(self.polar_state)
        try:
            self.config.save()
        except OSError as e:
            ui.notify(f"Could not save settings: {e}", type="warning")

    def plot_boxplot(self) -> None:
        self._show(*run_boxplot(self.source, self.box_state))
        self._save_config()

    def plot_polar(self) -> None:
        self._show(*run_polar(self.source, self.polar_state))
        self._save_config()

    def export(self) -> None:
        if self._last_figure is None:
            ui.notify("Nothing to export", type="warning")
            return
        path = Path.home() / "tablecharts_export.html"
        export_html(go.Figure(self._last_figure), path)
        ui.notify(f"Exported to {path}")
