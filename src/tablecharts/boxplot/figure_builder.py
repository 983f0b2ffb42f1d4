"""Plotly box-and-whisker figures from assembled boxplot data.

Plotly is the charting engine: quartiles, whiskers and outlier points are
computed by go.Box from the raw bucket values passed here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import plotly.graph_objects as go

from tablecharts.boxplot.boxplot_state import BoxPoints, BoxplotState
from tablecharts.boxplot.group_assembler import GroupedDataset
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)

# Trace name shown for the single series when there is no grouping column.
SINGLE_SERIES_NAME = "All"


class BoxFigureBuilder:
    """Generates Plotly box figures from a GroupedDataset and BoxplotState.

    One go.Box trace per series; within a trace every value is placed at its
    category's axis position, and ``boxmode="group"`` puts the series side by
    side within each category.
    """

    def __init__(self, state: BoxplotState) -> None:
        self.state = state

    def _trace(self, dataset: GroupedDataset, series: str) -> go.Box:
        positions: list[str] = []
        values: list[float] = []
        for category in dataset.categories:
            bucket = dataset.bucket(series, category)
            positions.extend([category] * len(bucket))
            values.extend(bucket)

        name = SINGLE_SERIES_NAME if dataset.is_single_series else series
        box_points = self.state.box_points
        kwargs = dict(
            name=name,
            offsetgroup=name,
            boxpoints=False if box_points is BoxPoints.NONE else box_points.value,
            boxmean=self.state.show_mean,
            marker=dict(size=4),
            line=dict(width=1.5),
            showlegend=self.state.show_legend and not dataset.is_single_series,
        )
        if self.state.horizontal:
            return go.Box(x=values, y=positions, orientation="h", **kwargs)
        return go.Box(x=positions, y=values, **kwargs)

    def make_figure(self, dataset: GroupedDataset) -> go.Figure:
        """Build the box figure. Categories keep selection order on the axis."""
        fig = go.Figure()
        for series in dataset.series_keys:
            fig.add_trace(self._trace(dataset, series))

        category_axis = dict(
            type="category",
            categoryorder="array",
            categoryarray=list(dataset.categories),
            title=dict(text=self.state.x_label),
        )
        value_axis = dict(title=dict(text=self.state.y_label), autorange=True)
        layout = dict(
            title_text=self.state.title,
            boxmode="group",
            margin=dict(l=40, r=20, t=40 if self.state.title else 20, b=60),
            showlegend=self.state.show_legend and not dataset.is_single_series,
            uirevision="keep",
        )
        if self.state.horizontal:
            layout["xaxis"] = value_axis
            layout["yaxis"] = category_axis
        else:
            layout["xaxis"] = category_axis
            layout["yaxis"] = value_axis
        if not dataset.is_single_series:
            layout["legend_title_text"] = dataset.group_by.display_name
        fig.update_layout(**layout)

        logger.debug(f"box figure: {len(fig.data)} traces, categories={list(dataset.categories)}")
        return fig

    def make_figure_dict(self, dataset: GroupedDataset) -> dict:
        """Figure as a plain dict (for ui.plotly)."""
        return self.make_figure(dataset).to_dict()


def export_html(fig: go.Figure, path: Union[str, Path]) -> Path:
    """Write a standalone HTML copy of fig and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(path), include_plotlyjs="cdn")
    logger.info(f"Exported figure to {path}")
    return path
