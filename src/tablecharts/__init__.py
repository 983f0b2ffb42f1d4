"""
tablecharts: statistical charts from measurement tables.

This package provides:
- GroupAssembler: partitions a results table into (series, category) buckets
- BoxFigureBuilder / PolarFigureBuilder: Plotly box and polar figures
- clear_thresholded: clear thresholded pixels inside an ROI across a stack
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from tablecharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from tablecharts.utils.logging import configure_logging, get_logger

from tablecharts.boxplot import (
    BoxFigureBuilder,
    BoxplotState,
    DataFrameSource,
    GroupAssembler,
    GroupedDataset,
    assemble_groups,
)
from tablecharts.polar import PolarFigureBuilder, PolarState
from tablecharts.stack import clear_thresholded

# NullHandler so logs don't propagate to root when no application has
# configured logging. Applications/demos call configure_logging().
_logger = logging.getLogger("tablecharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "BoxFigureBuilder",
    "BoxplotState",
    "DataFrameSource",
    "GroupAssembler",
    "GroupedDataset",
    "PolarFigureBuilder",
    "PolarState",
    "assemble_groups",
    "clear_thresholded",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
