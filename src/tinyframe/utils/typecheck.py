"""Classify the Python values stored in columns.

Storage decisions depend on a few questions asked over and over
about each cell and each column: is this value missing? is it
a number? is the column already a dense buffer or an Arrow array?

Missing values are ``None`` and float ``NaN``, numbers are any
:class:`numbers.Real` except booleans:

>>> is_null(float("nan")), is_null(0)
(True, False)
>>> is_number(3), is_number(2.5), is_number(True), is_number("3")
(True, True, False, False)
"""

import math
import numbers
from collections.abc import Sequence
from typing import Any

import numpy as np
import pyarrow as pa


def is_null(value: Any) -> bool:
    """Check if a value counts as missing."""
    if value is None:
        return True
    if isinstance(value, float | np.floating):
        return math.isnan(value)
    return False


def is_number(value: Any) -> bool:
    """Check if a value is a real number.

    ``NaN`` is still a number here, use :func:`is_null`
    first when missing values must be told apart.
    """
    return isinstance(value, numbers.Real) and not isinstance(value, bool | np.bool_)


def is_finite_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bool(value: Any) -> bool:
    return isinstance(value, bool | np.bool_)


def is_dense_buffer(obj: Any) -> bool:
    """Check if an object is a one dimensional fixed width numeric buffer.

    Integer buffers of any width and float32/float64 buffers qualify,
    object, string, boolean and half precision arrays do not.
    """
    if not isinstance(obj, np.ndarray) or obj.ndim != 1:
        return False
    return obj.dtype.kind in "iu" or obj.dtype.type in (np.float32, np.float64)


def is_columnar_handle(obj: Any) -> bool:
    """Check if an object carries the columnar marker.

    Arrow arrays are columnar by nature, any other object
    can opt in by exposing ``is_columnar = True``.
    """
    if isinstance(obj, pa.Array | pa.ChunkedArray):
        return True
    return getattr(obj, "is_columnar", False) is True


def is_sequence(obj: Any) -> bool:
    """Check if an object is an indexable sequence of cells.

    Text and bytes are sequences for Python but never a column.
    """
    if isinstance(obj, np.ndarray):
        return obj.ndim == 1
    return isinstance(obj, Sequence) and not isinstance(obj, str | bytes | bytearray)
