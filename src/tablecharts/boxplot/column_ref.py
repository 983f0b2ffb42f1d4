"""Group-by column conventions for boxplot assembly.

Single source of truth for the "no grouping" sentinel and the label column
name, and the explicit ColumnRef type the dialog selection is resolved into.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from tablecharts.boxplot.errors import InvalidConfigurationError

# Sentinel group-by choice meaning "one series containing every row".
# Used in: dialog select options, BoxplotState.group_by, resolve_group_by.
NO_GROUPING = "*None*"

# Heading of the non-numeric row label column in a results table.
LABEL_COLUMN = "Label"


class ColumnRefKind(Enum):
    """How the series key of a row is read."""
    NO_GROUPING = "no_grouping"
    LABEL = "label"
    NAMED = "named"


@dataclass(frozen=True)
class ColumnRef:
    """Resolved group-by column.

    ``heading`` is only set for ``ColumnRefKind.NAMED``.
    """
    kind: ColumnRefKind
    heading: Optional[str] = None

    @classmethod
    def no_grouping(cls) -> "ColumnRef":
        return cls(ColumnRefKind.NO_GROUPING)

    @classmethod
    def label(cls) -> "ColumnRef":
        return cls(ColumnRefKind.LABEL)

    @classmethod
    def named(cls, heading: str) -> "ColumnRef":
        return cls(ColumnRefKind.NAMED, str(heading))

    @property
    def display_name(self) -> str:
        """Name shown in legends and dialogs."""
        if self.kind is ColumnRefKind.NO_GROUPING:
            return NO_GROUPING
        if self.kind is ColumnRefKind.LABEL:
            return LABEL_COLUMN
        return str(self.heading)


def resolve_group_by(
    name: Optional[str],
    headings: Sequence[str],
    *,
    has_labels: bool,
    label_heading: str = LABEL_COLUMN,
) -> ColumnRef:
    """Resolve a group-by choice into a ColumnRef.

    Rules, in order:
    1. None or NO_GROUPING -> no grouping.
    2. Exact match to a (non-label) column heading -> named column.
    3. The label heading, when the table has a label column -> label column.
    4. Anything else raises InvalidConfigurationError.

    Args:
        name: Group-by choice from the dialog or a saved state.
        headings: Column headings of the table, label column excluded.
        has_labels: True if the table has a row label column.
        label_heading: Heading used for the label column.

    Raises:
        InvalidConfigurationError: If name matches no column.
    """
    if name is None or name == NO_GROUPING:
        return ColumnRef.no_grouping()
    if name in headings:
        return ColumnRef.named(name)
    if has_labels and name == label_heading:
        return ColumnRef.label()
    raise InvalidConfigurationError(
        f"Group-by column {name!r} not found; expected {NO_GROUPING!r}, "
        f"{label_heading!r} or one of {list(headings)}"
    )


def group_by_choices(headings: Sequence[str], *, has_labels: bool, label_heading: str = LABEL_COLUMN) -> list[str]:
    """Options for a group-by dropdown: sentinel, then label column, then headings."""
    choices = [NO_GROUPING]
    if has_labels:
        choices.append(label_heading)
    choices.extend(h for h in headings if h not in choices)
    return choices
