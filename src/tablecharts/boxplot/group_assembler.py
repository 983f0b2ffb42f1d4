"""Boxplot data grouping and category assembly.

Partitions a results table into (series, category) buckets of numeric values
before they are handed to the charting engine:

  1. The dialog selection is resolved once into an AssemblyConfig
     (ordered categories plus an explicit group-by ColumnRef).
  2. Series keys are the distinct string values of the group-by column
     (or the single key "" when there is no grouping).
  3. Each bucket holds, in table row order, the category column's values for
     rows whose series value string-equals the bucket's series key.

NaN values are kept; the charting engine decides how to draw them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import pandas as pd

from tablecharts.boxplot.column_ref import ColumnRef, ColumnRefKind, resolve_group_by
from tablecharts.boxplot.errors import EmptyConfigurationError, InvalidConfigurationError
from tablecharts.boxplot.tabular_source import TabularSource
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)

# Series key used when there is no grouping column.
SINGLE_SERIES_KEY = ""


def _ordered_unique(values: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for v in values:
        seen.setdefault(v, None)
    return tuple(seen)


@dataclass(frozen=True)
class AssemblyConfig:
    """Immutable column selection for one assembly run.

    Attributes:
        categories: Category column headings, in selection order, no duplicates.
        group_by: Resolved group-by column.
    """
    categories: tuple[str, ...]
    group_by: ColumnRef = field(default_factory=ColumnRef.no_grouping)

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", _ordered_unique(str(c) for c in self.categories))


@dataclass(frozen=True)
class GroupedDataset:
    """Result of an assembly run.

    Attributes:
        categories: Category headings in selection order.
        series_keys: Distinct series keys in order of first appearance.
        buckets: (series, category) -> values in table row order. Every pair
            has an entry, possibly empty.
        group_by: The group-by column the series were read from.
    """
    categories: tuple[str, ...]
    series_keys: tuple[str, ...]
    buckets: dict[tuple[str, str], tuple[float, ...]]
    group_by: ColumnRef

    @property
    def is_single_series(self) -> bool:
        return self.group_by.kind is ColumnRefKind.NO_GROUPING

    def bucket(self, series: str, category: str) -> tuple[float, ...]:
        """Values for one (series, category) pair.

        Raises:
            KeyError: If the pair is not part of this dataset.
        """
        return self.buckets[(series, category)]

    def series_for_category(self, category: str) -> list[tuple[str, tuple[float, ...]]]:
        """(series, values) pairs for one category, in series order."""
        if category not in self.categories:
            raise KeyError(f"Unknown category {category!r}")
        return [(s, self.buckets[(s, category)]) for s in self.series_keys]

    def bucket_sizes(self) -> dict[tuple[str, str], int]:
        return {key: len(values) for key, values in self.buckets.items()}

    def to_long_frame(self) -> pd.DataFrame:
        """Long-format frame with columns series, category, value."""
        rows = [
            {"series": s, "category": c, "value": v}
            for s in self.series_keys
            for c in self.categories
            for v in self.buckets[(s, c)]
        ]
        return pd.DataFrame(rows, columns=["series", "category", "value"])


class GroupAssembler:
    """Builds GroupedDataset objects from a TabularSource.

    Stateless apart from the source; ``assemble`` may be called any number
    of times and returns identical results for the same config.
    """

    def __init__(self, source: TabularSource) -> None:
        self.source = source

    def build_config(
        self,
        categories: Sequence[str],
        group_by: Optional[str],
    ) -> AssemblyConfig:
        """Resolve a dialog selection into an AssemblyConfig.

        Args:
            categories: Selected category headings, in selection order.
            group_by: Group-by choice (NO_GROUPING, the label heading, or a column heading).

        Raises:
            EmptyConfigurationError: If no category is selected.
            InvalidConfigurationError: If a category or the group-by column does not exist.
        """
        headings = self.source.column_headings()
        ref = resolve_group_by(
            group_by,
            headings,
            has_labels=self.source.has_labels,
            label_heading=self.source.label_heading,
        )
        config = AssemblyConfig(categories=tuple(categories), group_by=ref)
        self._validate(config, headings)
        return config

    def _validate(self, config: AssemblyConfig, headings: Sequence[str]) -> None:
        if not config.categories:
            raise EmptyConfigurationError("No category columns selected, nothing to plot")
        missing = [c for c in config.categories if c not in headings]
        if missing:
            raise InvalidConfigurationError(f"Category columns not found: {missing}")
        ref = config.group_by
        if ref.kind is ColumnRefKind.NAMED and ref.heading not in headings:
            raise InvalidConfigurationError(f"Group-by column {ref.heading!r} not found")
        if ref.kind is ColumnRefKind.LABEL and not self.source.has_labels:
            raise InvalidConfigurationError(
                f"Table has no label column {self.source.label_heading!r}"
            )

    def series_value(self, ref: ColumnRef, row: int) -> str:
        """Series key of one row."""
        if ref.kind is ColumnRefKind.NO_GROUPING:
            return SINGLE_SERIES_KEY
        if ref.kind is ColumnRefKind.LABEL:
            return self.source.label_value(row)
        return self.source.string_value(ref.heading, row)

    def assemble(self, config: AssemblyConfig) -> GroupedDataset:
        """Partition the table into (series, category) buckets.

        Raises:
            EmptyConfigurationError: If config has no categories.
            InvalidConfigurationError: If config names a column the table lacks.
        """
        self._validate(config, self.source.column_headings())

        n_rows = self.source.row_count()
        row_series = [self.series_value(config.group_by, r) for r in range(n_rows)]
        if config.group_by.kind is ColumnRefKind.NO_GROUPING:
            series_keys: tuple[str, ...] = (SINGLE_SERIES_KEY,)
        else:
            series_keys = _ordered_unique(row_series)

        buckets: dict[tuple[str, str], list[float]] = {
            (s, c): [] for s in series_keys for c in config.categories
        }
        for c in config.categories:
            for r, s in enumerate(row_series):
                buckets[(s, c)].append(self.source.numeric_value(c, r))

        logger.debug(
            f"assembled {len(series_keys)} series x {len(config.categories)} categories "
            f"from {n_rows} rows (group_by={config.group_by.display_name!r})"
        )
        return GroupedDataset(
            categories=config.categories,
            series_keys=series_keys,
            buckets={k: tuple(v) for k, v in buckets.items()},
            group_by=config.group_by,
        )


def assemble_groups(
    source: TabularSource,
    categories: Sequence[str],
    group_by: Optional[str],
) -> GroupedDataset:
    """Resolve a selection and assemble it in one call."""
    assembler = GroupAssembler(source)
    return assembler.assemble(assembler.build_config(categories, group_by))
