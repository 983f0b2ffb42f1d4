"""Results-table access for chart assembly.

Defines the TabularSource protocol consumed by GroupAssembler and the
pandas-backed DataFrameSource implementation, including a loader for
results tables saved as CSV.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Protocol, Union

import numpy as np
import pandas as pd

from tablecharts.boxplot.column_ref import LABEL_COLUMN
from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)

_NUMERIC_KINDS = {"i", "u", "f"}  # int, unsigned, float (pandas dtype.kind)


class TabularSource(Protocol):
    """Read-only view of a results table.

    ``column_headings()`` never includes the label column; label values are
    read through ``label_value()``.
    """

    @property
    def label_heading(self) -> str: ...

    @property
    def has_labels(self) -> bool: ...

    def column_headings(self) -> list[str]: ...

    def row_count(self) -> int: ...

    def numeric_value(self, heading: str, row: int) -> float: ...

    def label_value(self, row: int) -> str: ...

    def string_value(self, heading: str, row: int) -> str: ...


def format_cell(value: object) -> str:
    """String form of a cell, used for series keys.

    Integral floats print without a decimal part so a numeric group column
    holding 1.0, 2.0 yields keys "1", "2". Missing values print as "NaN".
    """
    if value is None:
        return "NaN"
    if isinstance(value, (float, np.floating)):
        if math.isnan(value):
            return "NaN"
        if float(value).is_integer():
            return str(int(value))
        return repr(float(value))
    if isinstance(value, (np.integer, np.bool_)):
        return str(value.item())
    try:
        if pd.isna(value):
            return "NaN"
    except (TypeError, ValueError):
        pass
    return str(value)


class DataFrameSource:
    """TabularSource backed by a pandas DataFrame.

    Attributes:
        df: The source DataFrame (not copied, never mutated).
        label_col: Heading of the label column, if present in df.
    """

    def __init__(self, df: pd.DataFrame, *, label_col: str = LABEL_COLUMN) -> None:
        """Wrap df as a results table.

        Args:
            df: Table with one column per measurement.
            label_col: Column holding row labels; it is optional in df.

        Raises:
            ValueError: If df is not a DataFrame or has duplicate headings.
        """
        if not isinstance(df, pd.DataFrame):
            raise ValueError(f"df must be a pandas DataFrame, got {type(df).__name__}")
        headings = [str(c) for c in df.columns]
        if len(set(headings)) != len(headings):
            raise ValueError(f"df has duplicate column headings: {headings}")
        self.df = df.copy(deep=False)
        self.df.columns = headings
        self.label_col = label_col

    @property
    def label_heading(self) -> str:
        return self.label_col

    @property
    def has_labels(self) -> bool:
        return self.label_col in self.df.columns

    def column_headings(self) -> list[str]:
        return [c for c in self.df.columns if c != self.label_col]

    def numeric_headings(self) -> list[str]:
        """Headings of numeric columns (the boxplot category candidates)."""
        return [
            c for c in self.column_headings()
            if getattr(self.df[c].dtype, "kind", None) in _NUMERIC_KINDS
        ]

    def row_count(self) -> int:
        return len(self.df)

    def _check_heading(self, heading: str) -> None:
        if heading == self.label_col or heading not in self.df.columns:
            raise KeyError(f"Unknown column {heading!r}")

    def numeric_value(self, heading: str, row: int) -> float:
        self._check_heading(heading)
        cell = pd.Series([self.df[heading].iloc[row]], dtype=object)
        return float(pd.to_numeric(cell, errors="coerce").iloc[0])

    def label_value(self, row: int) -> str:
        if not self.has_labels:
            raise KeyError(f"Table has no label column {self.label_col!r}")
        return format_cell(self.df[self.label_col].iloc[row])

    def string_value(self, heading: str, row: int) -> str:
        self._check_heading(heading)
        return format_cell(self.df[heading].iloc[row])

    @classmethod
    def from_csv(cls, path: Union[str, Path], *, label_col: str = LABEL_COLUMN) -> "DataFrameSource":
        """Load a results table saved as CSV.

        A leading unnamed or blank-named row-number column (as written by
        the results window) is dropped. The label column is read as text so
        labels such as "01" and "1" stay distinct.

        Raises:
            FileNotFoundError: If path does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"CSV not found: {path}")
        header = pd.read_csv(path, nrows=0).columns
        dtype = {label_col: str} if label_col in header else None
        df = pd.read_csv(path, dtype=dtype)
        if len(df.columns) > 0:
            first = str(df.columns[0])
            if first.strip() == "" or first.startswith("Unnamed: 0"):
                df = df.drop(columns=df.columns[0])
        logger.info(f"Loaded {path.name}: {len(df)} rows, {len(df.columns)} columns")
        return cls(df, label_col=label_col)
