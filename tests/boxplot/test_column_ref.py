"""Unit tests for group-by resolution (column_ref)."""

import pytest

from tablecharts.boxplot.column_ref import (
    LABEL_COLUMN,
    NO_GROUPING,
    ColumnRef,
    ColumnRefKind,
    group_by_choices,
    resolve_group_by,
)
from tablecharts.boxplot.errors import ChartConfigurationError, InvalidConfigurationError


def test_no_grouping_constant():
    assert NO_GROUPING == "*None*"
    assert LABEL_COLUMN == "Label"


def test_resolve_none_sentinel():
    ref = resolve_group_by(NO_GROUPING, ["A"], has_labels=True)
    assert ref.kind is ColumnRefKind.NO_GROUPING
    assert resolve_group_by(None, ["A"], has_labels=False) == ColumnRef.no_grouping()


def test_resolve_label():
    assert resolve_group_by("Label", ["A"], has_labels=True) == ColumnRef.label()


def test_resolve_custom_label_heading():
    ref = resolve_group_by("Name", ["A"], has_labels=True, label_heading="Name")
    assert ref.kind is ColumnRefKind.LABEL


def test_resolve_named_column():
    ref = resolve_group_by("cond", ["A", "cond"], has_labels=True)
    assert ref.kind is ColumnRefKind.NAMED
    assert ref.heading == "cond"
    assert ref.display_name == "cond"


def test_resolve_label_without_labels_raises():
    with pytest.raises(InvalidConfigurationError):
        resolve_group_by("Label", ["A"], has_labels=False)


def test_resolve_unknown_raises_configuration_error():
    """Unknown names are errors; ChartConfigurationError is a ValueError."""
    with pytest.raises(ChartConfigurationError) as exc_info:
        resolve_group_by("missing", ["A"], has_labels=True)
    assert isinstance(exc_info.value, ValueError)
    assert "missing" in str(exc_info.value)


def test_group_by_choices_order():
    assert group_by_choices(["A", "cond"], has_labels=True) == [NO_GROUPING, "Label", "A", "cond"]
    assert group_by_choices(["A"], has_labels=False) == [NO_GROUPING, "A"]


def test_existing_column_wins_over_label_heading():
    """A real column named like the label heading resolves as a named column."""
    ref = resolve_group_by("Label", ["Label", "A"], has_labels=True)
    assert ref.kind is ColumnRefKind.NAMED
    assert ref.heading == "Label"
