"""Boxplot state management.

This module defines the BoxPoints enum and BoxplotState dataclass used to
serialize the boxplot dialog selection and chart options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tablecharts.boxplot.column_ref import NO_GROUPING
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)


class BoxPoints(Enum):
    """Which raw points the chart engine draws next to each box."""
    OUTLIERS = "outliers"
    SUSPECTED_OUTLIERS = "suspectedoutliers"
    ALL = "all"
    NONE = "none"


@dataclass
class BoxplotState:
    """Dialog selection and display options for one boxplot."""
    categories: list[str] = field(default_factory=list)  # category columns, in selection order
    group_by: str = NO_GROUPING        # NO_GROUPING, label heading, or a column heading
    title: str = ""
    x_label: str = ""                  # empty -> no axis title
    y_label: str = ""
    show_legend: bool = True
    show_mean: bool = False            # dashed mean line inside each box
    box_points: BoxPoints = BoxPoints.OUTLIERS
    horizontal: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize BoxplotState to a JSON-friendly dict."""
        return {
            "categories": list(self.categories),
            "group_by": self.group_by,
            "title": self.title,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "show_legend": self.show_legend,
            "show_mean": self.show_mean,
            "box_points": self.box_points.value,
            "horizontal": self.horizontal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoxplotState":
        """Deserialize BoxplotState; missing or invalid values fall back to defaults."""
        categories = data.get("categories")
        if not isinstance(categories, list):
            categories = []
        try:
            box_points = BoxPoints(data.get("box_points", BoxPoints.OUTLIERS.value))
        except ValueError:
            logger.warning(f"Unknown box_points {data.get('box_points')!r}, using 'outliers'")
            box_points = BoxPoints.OUTLIERS
        group_by = data.get("group_by")
        return cls(
            categories=[str(c) for c in categories],
            group_by=NO_GROUPING if group_by is None else str(group_by),
            title=str(data.get("title", "")),
            x_label=str(data.get("x_label", "")),
            y_label=str(data.get("y_label", "")),
            show_legend=bool(data.get("show_legend", True)),
            show_mean=bool(data.get("show_mean", False)),
            box_points=box_points,
            horizontal=bool(data.get("horizontal", False)),
        )
