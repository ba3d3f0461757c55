"""Detect the narrowest storage type for a column.

Numeric columns are stored in fixed width buffers, and the
narrower the buffer the less memory the column takes.
:func:`infer_dtype` looks at every value of a column and picks the
smallest width that can hold all of them without losing information:

>>> infer_dtype([0, 255]).value
'u8'
>>> infer_dtype([0, 256]).value
'u16'
>>> infer_dtype([-1, 100]).value
'i8'
>>> infer_dtype([1, 2.5, 3]).value
'f64'
>>> infer_dtype([1, "a", 3]).value
'str'

Missing values are skipped, so ``[1, None, 2]`` gets the same
type as ``[1, 2]``. A column with no values at all is ``str``.

Integers beyond the 32 bit range are stored as ``f64``, which
can't represent exactly integers above ``2**53``.
"""

import enum
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from ..utils.typecheck import is_bool, is_null, is_number


class DType(enum.Enum):
    """The storage type of a column."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    F64 = "f64"
    BOOL = "bool"
    STR = "str"

    # Never produced by infer_dtype, only used to describe
    # numpy buffers that were provided already materialized.
    F32 = "f32"
    I64 = "i64"
    U64 = "u64"


_NUMPY_DTYPES = {
    DType.U8: np.dtype(np.uint8),
    DType.U16: np.dtype(np.uint16),
    DType.U32: np.dtype(np.uint32),
    DType.U64: np.dtype(np.uint64),
    DType.I8: np.dtype(np.int8),
    DType.I16: np.dtype(np.int16),
    DType.I32: np.dtype(np.int32),
    DType.I64: np.dtype(np.int64),
    DType.F32: np.dtype(np.float32),
    DType.F64: np.dtype(np.float64),
    DType.BOOL: np.dtype(np.bool_),
    DType.STR: np.dtype(object),
}
_DTYPES_BY_NUMPY = {v: k for k, v in _NUMPY_DTYPES.items()}

# Upper bound of each integer width, in the order they are tried.
_UNSIGNED_LIMITS = ((DType.U8, 0xFF), (DType.U16, 0xFFFF), (DType.U32, 0xFFFFFFFF))
_SIGNED_LIMITS = ((DType.I8, 0x7F), (DType.I16, 0x7FFF), (DType.I32, 0x7FFFFFFF))


def infer_dtype(values: Iterable[Any]) -> DType:
    """Detect the narrowest DType able to hold all the values.

    The whole column is scanned once, a sample would not be
    enough to guarantee that no value gets truncated.

    :param values: The cells of the column.
    """
    has_bools = False
    has_numbers = False
    integer = True
    unsigned = True
    maxvalue = 0
    for v in values:
        if is_null(v):
            continue
        if is_bool(v):
            has_bools = True
            continue
        if not is_number(v):
            return DType.STR
        has_numbers = True
        if integer and not isinstance(v, int | np.integer) and not float(v).is_integer():
            integer = False
        if v < 0:
            unsigned = False
        # numpy scalars would wrap around on abs(), go through Python numbers.
        magnitude = abs(v.item() if isinstance(v, np.generic) else v)
        if magnitude > maxvalue:
            maxvalue = magnitude

    if has_bools:
        # Booleans mixed with numbers are not a numeric column.
        return DType.STR if has_numbers else DType.BOOL
    if not has_numbers:
        return DType.STR
    if not integer:
        return DType.F64

    limits = _UNSIGNED_LIMITS + _SIGNED_LIMITS if unsigned else _SIGNED_LIMITS
    for dtype, limit in limits:
        if maxvalue <= limit:
            return dtype
    return DType.F64


def is_numeric_dtype(dtype: DType) -> bool:
    """Check if a DType is stored in a numeric buffer."""
    return dtype not in (DType.STR, DType.BOOL)


def is_integer_dtype(dtype: DType) -> bool:
    return numpy_dtype(dtype).kind in "iu"


def numpy_dtype(dtype: DType) -> np.dtype:
    """The numpy dtype used to store a DType."""
    return _NUMPY_DTYPES[dtype]


def dtype_from_buffer(buffer: np.ndarray) -> DType:
    """Map the element type of a numpy buffer back to a DType.

    Buffers of types that have no DType counterpart
    are reported as ``STR``, the generic type.
    """
    return _DTYPES_BY_NUMPY.get(buffer.dtype, DType.STR)


def can_hold(container: DType, dtype: DType) -> bool:
    """Check if values of ``dtype`` fit in a ``container`` buffer without loss."""
    if not (is_numeric_dtype(container) and is_numeric_dtype(dtype)):
        return container == dtype
    return np.can_cast(numpy_dtype(dtype), numpy_dtype(container), casting="safe")


def to_dense(values: Sequence[Any], dtype: DType) -> tuple[np.ndarray, DType]:
    """Materialize values into a buffer of the requested DType.

    Missing values become ``NaN``. Integer buffers can't store
    ``NaN``, so when the column has missing values it gets
    promoted to ``f64`` and the returned DType reflects that.

    :param values: The cells of the column, all numbers or missing.
    :param dtype: The numeric DType, usually from :func:`infer_dtype`.
    :raises OverflowError: when an integer is too large even for ``f64``.
    """
    if not is_numeric_dtype(dtype):
        raise ValueError(f"Unsupported dtype for a dense buffer: {dtype.value}")

    has_nulls = any(is_null(v) for v in values)
    if has_nulls and is_integer_dtype(dtype):
        dtype = DType.F64
    if has_nulls:
        values = [np.nan if is_null(v) else v for v in values]
    return np.array(values, dtype=numpy_dtype(dtype)), dtype
