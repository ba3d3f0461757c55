"""Storage for numeric columns in fixed width buffers.

The values are kept in a one dimensional ``numpy`` array
of the narrowest type that can hold them, see
:func:`tinyframe.storage.dtypes.infer_dtype`.
Operations run as numpy loops over the buffer,
there is no null bitmap and missing values are ``NaN``.
"""

from collections.abc import Callable
from typing import Any

import numpy as np

from .base import ColumnVector
from .dtypes import DType, can_hold, dtype_from_buffer, infer_dtype, is_numeric_dtype, to_dense


class DenseNumericVector(ColumnVector):
    """Column of numbers stored in a numpy buffer.

    The buffer is wrapped as is, without copying it,
    so a vector can share memory with the array it was built from.
    """

    def __init__(self, buffer: np.ndarray) -> None:
        """
        :param buffer: A one dimensional numeric numpy array.
        """
        if not isinstance(buffer, np.ndarray) or buffer.ndim != 1:
            raise TypeError("DenseNumericVector requires a one dimensional numpy array")
        self._data = buffer
        self.length = len(buffer)

    @property
    def dtype(self) -> DType:
        """DType of the underlying buffer."""
        return dtype_from_buffer(self._data)

    def get(self, i: int) -> Any:
        """Get the value at position ``i``.

        Reads are only defined in ``[0, length)``, an index
        outside of that range raises :class:`IndexError`.
        """
        if i < 0:
            raise IndexError(f"index {i} is out of bounds for a column of length {self.length}")
        return self._data[i].item()

    def to_list(self) -> list[Any]:
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        """The buffer holding the values, not a copy."""
        return self._data

    def sum(self) -> Any:
        return self._data.sum().item()

    def map(self, fn: Callable[[Any, int], Any]) -> ColumnVector:
        """Apply ``fn`` to every value.

        The new vector keeps the width of the current one if all
        the results fit in it, otherwise the width is detected again
        from the results. Mapping a ``u8`` column to fractions gives
        a ``f64`` column instead of truncating the fractions.
        Results that are not numbers, or integers too large for
        ``f64``, produce a generic vector.
        """
        from .generic import GenericVector

        mapped = [fn(v, i) for i, v in enumerate(self._data.tolist())]
        if not mapped:
            return DenseNumericVector(np.empty(0, dtype=self._data.dtype))

        inferred = infer_dtype(mapped)
        if not is_numeric_dtype(inferred):
            return GenericVector(mapped, copy=False)

        current = self.dtype
        target = current if can_hold(current, inferred) else inferred
        try:
            buffer, _ = to_dense(mapped, target)
        except OverflowError:
            return GenericVector(mapped, copy=False)
        return DenseNumericVector(buffer)

    def slice(self, start: int | None = None, end: int | None = None) -> "DenseNumericVector":
        # numpy slices are views, copy so the new vector owns its values.
        return DenseNumericVector(self._data[start:end].copy())
