"""Storage for columns of arbitrary Python objects.

Used for text, mixed type and object columns whenever
the columnar backend is not chosen or not available.
"""

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from ..utils.typecheck import is_null, is_number
from .base import ColumnVector

#: How many values :meth:`GenericVector.sum` inspects to decide if a column is numeric.
SUM_SAMPLE_SIZE = 10


class GenericVector(ColumnVector):
    """Column of boxed Python values kept in a list."""

    def __init__(self, values: Sequence[Any], copy: bool = True) -> None:
        """
        :param values: The values of the column.
        :param copy: When ``False`` and ``values`` is a list, the
                     vector keeps a reference to it instead of
                     copying it. Changes to the list will then be
                     visible through the vector.
        """
        if copy or not isinstance(values, list):
            values = list(values)
        self._data = values
        self.length = len(values)

    def get(self, i: int) -> Any:
        if 0 <= i < self.length:
            return self._data[i]
        return None

    def to_list(self) -> list[Any]:
        return list(self._data)

    def sum(self) -> Any:
        """Sum the values if the column looks numeric.

        Only the first :data:`SUM_SAMPLE_SIZE` values that are not
        missing are checked to decide if the column is numeric.
        A column that starts with numbers but contains text
        later on will get the text counted as ``0``.
        """
        sample = [v for v in self._data[:SUM_SAMPLE_SIZE] if not is_null(v)]
        if not all(is_number(v) for v in sample):
            return None
        return sum((v for v in self._data if is_number(v)), 0)

    def map(self, fn: Callable[[Any, int], Any]) -> ColumnVector:
        """Apply ``fn`` to every value.

        When all the results are numbers, the new vector
        switches to dense numeric storage.
        """
        from .dense import DenseNumericVector

        mapped = [fn(v, i) for i, v in enumerate(self._data)]
        if all(is_number(v) and not is_null(v) for v in mapped):
            try:
                return DenseNumericVector(np.array(mapped, dtype=np.float64))
            except OverflowError:
                # Integers beyond the float64 range stay boxed.
                pass
        return GenericVector(mapped, copy=False)

    def slice(self, start: int | None = None, end: int | None = None) -> "GenericVector":
        return GenericVector(self._data[start:end], copy=False)
