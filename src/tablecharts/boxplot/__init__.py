"""Boxplot data assembly: results table -> (series, category) buckets -> Plotly box figure."""

from tablecharts.boxplot.boxplot_state import BoxPoints, BoxplotState
from tablecharts.boxplot.column_ref import LABEL_COLUMN, NO_GROUPING, ColumnRef, ColumnRefKind
from tablecharts.boxplot.errors import (
    ChartConfigurationError,
    EmptyConfigurationError,
    InvalidConfigurationError,
)
from tablecharts.boxplot.figure_builder import BoxFigureBuilder
from tablecharts.boxplot.group_assembler import (
    AssemblyConfig,
    GroupAssembler,
    GroupedDataset,
    assemble_groups,
)
from tablecharts.boxplot.tabular_source import DataFrameSource, TabularSource

__all__ = [
    "AssemblyConfig",
    "BoxFigureBuilder",
    "BoxPoints",
    "BoxplotState",
    "ChartConfigurationError",
    "ColumnRef",
    "ColumnRefKind",
    "DataFrameSource",
    "EmptyConfigurationError",
    "GroupAssembler",
    "GroupedDataset",
    "InvalidConfigurationError",
    "LABEL_COLUMN",
    "NO_GROUPING",
    "TabularSource",
    "assemble_groups",
]
