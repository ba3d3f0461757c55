"""Decide which storage backend a column should use.

Arrow storage pays off for text, which is variable width,
for columns mixing missing values with non numeric data,
which need a validity bitmap, and for very large columns.
Homogeneous numeric data is better served by a dense buffer.

:func:`should_use_columnar` applies these rules in order,
the first rule that matches decides:

1. Explicit flags: ``always_columnar``, then ``never_columnar``,
   then ``prefer_columnar`` when it is a boolean.
2. Data that is already columnar stays columnar.
3. Data that is already a dense numeric buffer stays dense.
4. Anything that is not a sequence, or is empty, is not columnar.
5. Sequences longer than :data:`LARGE_COLUMN_THRESHOLD` are columnar.
6. Otherwise the values are scanned: text, or missing values
   in a column that is not purely numeric, make it columnar.

Missing values don't change whether a column is purely numeric,
so numbers with gaps still go to dense storage:

>>> should_use_columnar([1, 2, None, 4, 5])
False
>>> should_use_columnar(["a", None, "c"])
True
>>> should_use_columnar(["a", "b"], never_columnar=True)
False
"""

from typing import Any

from ..utils.typecheck import (
    is_columnar_handle,
    is_dense_buffer,
    is_null,
    is_number,
    is_sequence,
    is_string,
)

#: Columns with more values than this are always stored in columnar format.
LARGE_COLUMN_THRESHOLD = 1_000_000


def should_use_columnar(
    data: Any,
    *,
    always_columnar: bool = False,
    never_columnar: bool = False,
    prefer_columnar: bool | None = None,
) -> bool:
    """Check if a column should be stored in columnar format.

    :param data: The values of the column, or an already built vector or buffer.
    :param always_columnar: Force columnar storage, wins over any other flag.
    :param never_columnar: Forbid columnar storage.
    :param prefer_columnar: When set, used as the answer in place of the heuristics.
    """
    if always_columnar:
        return True
    if never_columnar:
        return False
    if isinstance(prefer_columnar, bool):
        return prefer_columnar

    if is_columnar_handle(data):
        return True
    if is_dense_buffer(data):
        return False

    # Sequence-ness is checked before the size, so objects that only
    # report a large length without being indexable are never columnar.
    if not is_sequence(data) or len(data) == 0:
        return False
    if len(data) > LARGE_COLUMN_THRESHOLD:
        return True

    has_nulls = False
    has_strings = False
    numeric = True
    for v in data:
        if is_null(v):
            has_nulls = True
        elif is_string(v):
            has_strings = True
            numeric = False
        elif not is_number(v):
            numeric = False

        if has_strings and has_nulls:
            # Nothing else can change the outcome.
            break

    return has_strings or (has_nulls and not numeric)
