"""Storage for columns held in Apache Arrow arrays.

Arrow keeps variable width values like text in contiguous
buffers and tracks missing values in a validity bitmap,
which makes it the preferred storage for text columns,
columns with missing values and very large columns.

>>> import pyarrow as pa
>>> vector = ColumnarVector(pa.array(["apple", None, "cherry"]))
>>> vector.get(1) is None, vector.to_list()
(True, ['apple', None, 'cherry'])
"""

import logging
from collections.abc import Callable
from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

from .backends import ArrowColumnarBackend, ColumnarConversionError
from .base import ColumnVector, slice_bounds

logger = logging.getLogger(__name__)

_ARROW = ArrowColumnarBackend()


class ColumnarVector(ColumnVector):
    """Column stored in an Arrow array.

    The array is wrapped without copying it, and
    is available back through :meth:`to_arrow`.
    """

    is_columnar = True

    def __init__(self, array: pa.Array | pa.ChunkedArray) -> None:
        """
        :param array: The :class:`pyarrow.Array` or
                      :class:`pyarrow.ChunkedArray` with the values.
        """
        if not isinstance(array, pa.Array | pa.ChunkedArray):
            raise TypeError(
                f"ColumnarVector requires a pyarrow Array, got {type(array).__name__}"
            )
        self._arrow = array
        self.length = len(array)

    def get(self, i: int) -> Any:
        if 0 <= i < self.length:
            return self._arrow[i].as_py()
        return None

    def to_list(self) -> list[Any]:
        return self._arrow.to_pylist()

    def to_arrow(self) -> pa.Array | pa.ChunkedArray:
        """The Arrow array holding the values, not a copy."""
        return self._arrow

    def sum(self) -> Any:
        """Sum the values using the Arrow ``sum`` kernel.

        Missing values count as ``0``. Arrays that are not
        numeric return ``None``.
        """
        arrow_type = self._arrow.type
        if pa.types.is_null(arrow_type):
            return 0
        if not (
            pa.types.is_integer(arrow_type)
            or pa.types.is_floating(arrow_type)
            or pa.types.is_decimal(arrow_type)
        ):
            return None
        return pc.sum(self._arrow, min_count=0).as_py()

    def map(self, fn: Callable[[Any, int], Any]) -> ColumnVector:
        """Apply ``fn`` to every value and store the results in a new Arrow array.

        If the results can't be stored in a single Arrow array,
        for example because they mix text and numbers,
        they are kept in a generic vector instead.
        """
        from .generic import GenericVector

        mapped = [fn(v, i) for i, v in enumerate(self._arrow.to_pylist())]
        try:
            return ColumnarVector(_ARROW.vector_from_sequence(mapped))
        except ColumnarConversionError as e:
            logger.debug("Mapped values kept in generic storage: %s", e)
            return GenericVector(mapped, copy=False)

    def slice(self, start: int | None = None, end: int | None = None) -> "ColumnarVector":
        start, end = slice_bounds(self.length, start, end)
        return ColumnarVector(self._arrow.slice(start, end - start))
