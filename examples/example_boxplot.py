"""Headless example: results table -> grouped boxplot + polar plot HTML files.

Run:
    python examples/example_boxplot.py [Results.csv]
"""

import sys
from pathlib import Path

from tablecharts.boxplot import BoxFigureBuilder, BoxplotState, DataFrameSource, assemble_groups
from tablecharts.boxplot.figure_builder import export_html
from tablecharts.boxplot_app.sample_data import sample_results_table
from tablecharts.polar import PolarFigureBuilder, PolarState
from tablecharts.utils.logging import configure_logging

configure_logging(level="DEBUG")

if len(sys.argv) > 1:
    source = DataFrameSource.from_csv(sys.argv[1])
else:
    source = DataFrameSource(sample_results_table())

state = BoxplotState(categories=["Area", "Mean"], group_by="Label", title="Area and Mean by label")
dataset = assemble_groups(source, state.categories, state.group_by)
for category in dataset.categories:
    for series, values in dataset.series_for_category(category):
        print(f"{category:>6} {series:>10} n={len(values)}")

out_dir = Path("chart_exports")
export_html(BoxFigureBuilder(state).make_figure(dataset), out_dir / "boxplot.html")

polar = PolarState(angle_column="Angle", radius_columns=["Circ."], fill=True)
export_html(PolarFigureBuilder(polar).make_figure(source), out_dir / "polar.html")
