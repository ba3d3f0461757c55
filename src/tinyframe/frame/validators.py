"""Checks applied to the data used to build tables.

A malformed table must never be returned, so table construction
validates its input upfront and fails with an error that names
the column or row at fault.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..storage.base import ColumnVector
from ..utils.typecheck import is_dense_buffer, is_sequence

#: Supported copy policies, see :class:`tinyframe.frame.table.TableOptions`.
COPY_POLICIES = ("none", "shallow", "deep")


def validate_copy_policy(copy: str) -> None:
    if copy not in COPY_POLICIES:
        raise ValueError(
            f"Invalid copy policy: {copy!r}, expected one of {', '.join(COPY_POLICIES)}"
        )


def validate_column_names(names: Iterable[Any]) -> None:
    """Check that column names are non-empty strings without duplicates."""
    seen = set()
    for name in names:
        if not isinstance(name, str) or not name:
            raise FrameConstructionError(
                f"Column names must be non-empty strings, got {name!r}"
            )
        if name in seen:
            raise FrameConstructionError(f"Duplicate column name: {name!r}")
        seen.add(name)


def validate_column_data(name: str, values: Any) -> None:
    """Check that the data of a column is something a vector can be built from."""
    if isinstance(values, ColumnVector) or is_dense_buffer(values) or is_sequence(values):
        return
    raise InvalidColumnError(
        f"Column {name!r} must be a sequence or a numeric buffer, got {type(values).__name__}"
    )


def validate_column_lengths(columns: Mapping[str, Any], row_count: int | None = None) -> int:
    """Check that all columns have the same number of rows.

    :param columns: The columns to check, by name.
    :param row_count: The expected number of rows, when not
                      provided the length of the first column is used.
    :returns: The number of rows of the columns.
    """
    for name, values in columns.items():
        if row_count is None:
            row_count = len(values)
        elif len(values) != row_count:
            raise ColumnLengthMismatchError(
                f"Column length mismatch: column {name!r} has {len(values)} rows, expected {row_count}"
            )
    return row_count or 0


def validate_records(rows: Sequence[Any]) -> None:
    """Check that every row is a mapping of column names to values."""
    for idx, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise FrameConstructionError(
                f"Row {idx} must be a mapping of column names to values, got {type(row).__name__}"
            )


class FrameConstructionError(ValueError):
    """The data provided can't be used to build a table."""

    pass


class ColumnLengthMismatchError(FrameConstructionError):
    """A column has a different number of rows than the others."""

    pass


class InvalidColumnError(FrameConstructionError):
    """The data of a column is neither a sequence nor a buffer."""

    pass
