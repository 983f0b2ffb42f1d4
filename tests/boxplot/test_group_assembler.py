"""Unit tests for GroupAssembler: series keys, bucket assignment, and config errors."""

import math

import pandas as pd
import pytest

from tablecharts.boxplot.column_ref import NO_GROUPING, ColumnRef, ColumnRefKind
from tablecharts.boxplot.errors import EmptyConfigurationError, InvalidConfigurationError
from tablecharts.boxplot.group_assembler import (
    AssemblyConfig,
    GroupAssembler,
    assemble_groups,
)
from tablecharts.boxplot.tabular_source import DataFrameSource


@pytest.fixture
def small_source():
    """Table [Label, A, B] with two labels."""
    df = pd.DataFrame({
        "Label": ["g1", "g1", "g2"],
        "A": [1.0, 2.0, 3.0],
        "B": [10.0, 20.0, 30.0],
    })
    return DataFrameSource(df)


@pytest.fixture
def grouped_source():
    """Table with a label column, a numeric group column and a string group column."""
    df = pd.DataFrame({
        "Label": ["a.tif", "b.tif", "c.tif", "d.tif", "e.tif", "f.tif"],
        "Slice": [1, 2, 1, 2, 1, 3],
        "cond": ["ctl", "drug", "ctl", "ctl", "drug", "Ctl"],
        "Area": [5.0, 6.0, float("nan"), 8.0, 9.0, 10.0],
        "Mean": [0.5, 0.6, 0.7, 0.8, 0.9, 1.0],
    })
    return DataFrameSource(df)


def test_label_grouping_example(small_source):
    """Grouping by Label partitions rows by label value."""
    ds = assemble_groups(small_source, ["A", "B"], "Label")
    assert ds.group_by.kind is ColumnRefKind.LABEL
    assert set(ds.series_keys) == {"g1", "g2"}
    assert ds.bucket("g1", "A") == (1.0, 2.0)
    assert ds.bucket("g1", "B") == (10.0, 20.0)
    assert ds.bucket("g2", "A") == (3.0,)
    assert ds.bucket("g2", "B") == (30.0,)


def test_no_grouping_example(small_source):
    """*None* yields one series keyed '' holding every row."""
    ds = assemble_groups(small_source, ["A", "B"], NO_GROUPING)
    assert ds.series_keys == ("",)
    assert ds.is_single_series
    assert ds.bucket("", "A") == (1.0, 2.0, 3.0)
    assert ds.bucket("", "B") == (10.0, 20.0, 30.0)


def test_empty_categories_raises(small_source):
    """No categories selected is an empty-configuration condition."""
    with pytest.raises(EmptyConfigurationError):
        assemble_groups(small_source, [], "Label")


def test_assemble_empty_config_raises(small_source):
    """assemble() also rejects a directly-built config with no categories."""
    assembler = GroupAssembler(small_source)
    with pytest.raises(EmptyConfigurationError):
        assembler.assemble(AssemblyConfig(categories=(), group_by=ColumnRef.label()))


def test_bucket_sizes_sum_to_row_count(grouped_source):
    """For each category, every row lands in exactly one series bucket."""
    for group_by in ["Label", "Slice", "cond", NO_GROUPING]:
        ds = assemble_groups(grouped_source, ["Area", "Mean"], group_by)
        for c in ds.categories:
            total = sum(len(values) for _, values in ds.series_for_category(c))
            assert total == grouped_source.row_count()


def test_single_series_bucket_size_equals_row_count(grouped_source):
    ds = assemble_groups(grouped_source, ["Area", "Mean"], NO_GROUPING)
    for c in ds.categories:
        assert len(ds.bucket("", c)) == grouped_source.row_count()


def test_series_keys_are_distinct_column_values(grouped_source):
    """Series keys equal the distinct string values of the group column, first-seen order."""
    ds = assemble_groups(grouped_source, ["Area"], "cond")
    assert ds.series_keys == ("ctl", "drug", "Ctl")
    assert len(set(ds.series_keys)) == len(ds.series_keys)


def test_exact_string_match_no_case_folding(grouped_source):
    """'Ctl' and 'ctl' are separate series."""
    ds = assemble_groups(grouped_source, ["Mean"], "cond")
    assert ds.bucket("ctl", "Mean") == (0.5, 0.7, 0.8)
    assert ds.bucket("Ctl", "Mean") == (1.0,)


def test_numeric_group_column_keys(grouped_source):
    """Integer group column yields keys '1', '2', '3'."""
    ds = assemble_groups(grouped_source, ["Mean"], "Slice")
    assert ds.series_keys == ("1", "2", "3")
    assert ds.bucket("1", "Mean") == (0.5, 0.7, 0.9)
    assert ds.bucket("3", "Mean") == (1.0,)


def test_nan_values_pass_through(grouped_source):
    """NaN is kept in its bucket, in row order."""
    ds = assemble_groups(grouped_source, ["Area"], "cond")
    values = ds.bucket("ctl", "Area")
    assert len(values) == 3
    assert values[0] == 5.0
    assert math.isnan(values[1])
    assert values[2] == 8.0


def test_every_pair_has_a_bucket(grouped_source):
    """Buckets exist for every (series, category) pair."""
    ds = assemble_groups(grouped_source, ["Area", "Mean"], "Label")
    assert set(ds.buckets) == {(s, c) for s in ds.series_keys for c in ds.categories}


def test_idempotent(grouped_source):
    assembler = GroupAssembler(grouped_source)
    config = assembler.build_config(["Mean", "Area"], "cond")
    first = assembler.assemble(config)
    second = assembler.assemble(config)
    assert first.series_keys == second.series_keys
    assert first.bucket_sizes() == second.bucket_sizes()
    assert first.bucket("drug", "Mean") == second.bucket("drug", "Mean")


def test_category_order_preserved_and_duplicates_collapse(small_source):
    ds = assemble_groups(small_source, ["B", "A", "B"], NO_GROUPING)
    assert ds.categories == ("B", "A")


def test_unknown_group_by_raises(small_source):
    """An unresolvable group-by name is an error, not a label-column alias."""
    with pytest.raises(InvalidConfigurationError) as exc_info:
        assemble_groups(small_source, ["A"], "Condition")
    assert "Condition" in str(exc_info.value)


def test_unknown_category_raises(small_source):
    with pytest.raises(InvalidConfigurationError) as exc_info:
        assemble_groups(small_source, ["A", "C"], NO_GROUPING)
    assert "C" in str(exc_info.value)


def test_label_category_rejected(small_source):
    """The label column is not a category."""
    with pytest.raises(InvalidConfigurationError):
        assemble_groups(small_source, ["Label"], NO_GROUPING)


def test_label_grouping_without_label_column_raises():
    source = DataFrameSource(pd.DataFrame({"A": [1.0], "B": [2.0]}))
    with pytest.raises(InvalidConfigurationError):
        assemble_groups(source, ["A"], "Label")


def test_build_config_named_column(grouped_source):
    config = GroupAssembler(grouped_source).build_config(["Area"], "cond")
    assert config.group_by == ColumnRef.named("cond")
    assert config.categories == ("Area",)


def test_series_for_category_order(small_source):
    ds = assemble_groups(small_source, ["A"], "Label")
    assert ds.series_for_category("A") == [("g1", (1.0, 2.0)), ("g2", (3.0,))]
    with pytest.raises(KeyError):
        ds.series_for_category("B")


def test_empty_bucket_kept():
    """A series with no rows for some category still gets an (empty) bucket."""
    df = pd.DataFrame({"Label": ["x", "y"], "A": [1.0, 2.0]})
    ds = assemble_groups(DataFrameSource(df), ["A"], "Label")
    assert ds.bucket_sizes() == {("x", "A"): 1, ("y", "A"): 1}


def test_empty_table_yields_no_series_for_named_grouping():
    df = pd.DataFrame({"Label": pd.Series([], dtype=object), "A": pd.Series([], dtype=float)})
    ds = assemble_groups(DataFrameSource(df), ["A"], "Label")
    assert ds.series_keys == ()
    assert ds.buckets == {}


def test_to_long_frame(small_source):
    ds = assemble_groups(small_source, ["A", "B"], "Label")
    long_df = ds.to_long_frame()
    assert list(long_df.columns) == ["series", "category", "value"]
    assert len(long_df) == 6
    g1_a = long_df[(long_df["series"] == "g1") & (long_df["category"] == "A")]["value"].tolist()
    assert g1_a == [1.0, 2.0]
