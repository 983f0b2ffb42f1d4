"""Unit tests for DataFrameSource (TabularSource over pandas)."""

import math

import numpy as np
import pandas as pd
import pytest

from tablecharts.boxplot.group_assembler import assemble_groups
from tablecharts.boxplot.tabular_source import DataFrameSource, format_cell


@pytest.fixture
def sample_df():
    return pd.DataFrame({
        "Label": ["a", "b", "c"],
        "Slice": [1, 2, 3],
        "Area": [1.5, float("nan"), 3.0],
        "Note": ["x", "y", "12"],
    })


def test_headings_exclude_label(sample_df):
    source = DataFrameSource(sample_df)
    assert source.column_headings() == ["Slice", "Area", "Note"]
    assert source.has_labels
    assert source.label_heading == "Label"
    assert source.row_count() == 3


def test_numeric_headings(sample_df):
    assert DataFrameSource(sample_df).numeric_headings() == ["Slice", "Area"]


def test_numeric_value_coerces(sample_df):
    source = DataFrameSource(sample_df)
    assert source.numeric_value("Area", 0) == 1.5
    assert math.isnan(source.numeric_value("Area", 1))
    assert math.isnan(source.numeric_value("Note", 0))
    assert source.numeric_value("Note", 2) == 12.0


def test_string_and_label_values(sample_df):
    source = DataFrameSource(sample_df)
    assert source.label_value(1) == "b"
    assert source.string_value("Slice", 0) == "1"
    assert source.string_value("Area", 1) == "NaN"
    assert source.string_value("Area", 0) == "1.5"


def test_unknown_column_raises(sample_df):
    source = DataFrameSource(sample_df)
    with pytest.raises(KeyError):
        source.numeric_value("missing", 0)
    with pytest.raises(KeyError):
        source.string_value("Label", 0)


def test_no_label_column():
    source = DataFrameSource(pd.DataFrame({"A": [1.0]}))
    assert not source.has_labels
    with pytest.raises(KeyError):
        source.label_value(0)


def test_init_rejects_non_dataframe():
    with pytest.raises(ValueError) as exc_info:
        DataFrameSource([[1, 2]])
    assert "DataFrame" in str(exc_info.value)


def test_format_cell():
    assert format_cell(2.0) == "2"
    assert format_cell(np.float64(2.5)) == "2.5"
    assert format_cell(np.int64(7)) == "7"
    assert format_cell(None) == "NaN"
    assert format_cell(float("nan")) == "NaN"
    assert format_cell("g1") == "g1"


def test_from_csv_drops_row_number_column(tmp_path):
    path = tmp_path / "Results.csv"
    path.write_text(" ,Label,Area\n1,a,1.0\n2,b,2.0\n", encoding="utf-8")
    source = DataFrameSource.from_csv(path)
    assert source.column_headings() == ["Area"]
    assert source.label_value(1) == "b"


def test_from_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataFrameSource.from_csv(tmp_path / "nope.csv")


def test_from_csv_keeps_numeric_looking_labels_distinct(tmp_path):
    """Labels "01" and "1" are read as text and group into two series."""
    path = tmp_path / "Results.csv"
    path.write_text(" ,Label,A\n1,01,1.0\n2,1,2.0\n", encoding="utf-8")
    source = DataFrameSource.from_csv(path)
    assert source.label_value(0) == "01"
    assert source.label_value(1) == "1"
    ds = assemble_groups(source, ["A"], "Label")
    assert ds.series_keys == ("01", "1")
    assert ds.bucket("01", "A") == (1.0,)
    assert source.numeric_headings() == ["A"]


def test_from_csv_without_label_column(tmp_path):
    path = tmp_path / "Results.csv"
    path.write_text("A,B\n1.0,2.0\n", encoding="utf-8")
    source = DataFrameSource.from_csv(path)
    assert not source.has_labels
    assert source.column_headings() == ["A", "B"]
