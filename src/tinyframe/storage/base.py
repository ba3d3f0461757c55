"""Base class and interface of column storage.

Every column of a table is held by a :class:`ColumnVector`.
The vector hides how the values are physically stored, so that
code working on columns only relies on a small contract:

* ``get(i)`` to read a single value,
* ``to_list()`` to get a copy of all the values,
* ``sum()`` to add up numeric columns,
* ``map(fn)`` and ``slice(start, end)`` to derive new vectors.

Vectors are immutable: transformations always return a new vector
and never change the values of the one they are applied to.

Three storage backends implement the contract:

* :class:`tinyframe.storage.generic.GenericVector` keeps Python objects in a list.
* :class:`tinyframe.storage.dense.DenseNumericVector` keeps numbers
  in a fixed width ``numpy`` buffer.
* :class:`tinyframe.storage.columnar.ColumnarVector` keeps an Apache Arrow array.
"""

import abc
from collections.abc import Callable, Iterator
from typing import Any


class ColumnVector(abc.ABC):
    """Storage for the values of one column.

    Subclasses must set ``self.length`` when constructed
    and never change it afterwards.

    A vector that only wraps a Python list could be as simple as::

        class ListVector(ColumnVector):
            def __init__(self, values):
                self._values = list(values)
                self.length = len(self._values)

            def get(self, i):
                return self._values[i]

            def to_list(self):
                return list(self._values)

            def sum(self):
                return sum(self._values)

            def map(self, fn):
                return ListVector([fn(v, i) for i, v in enumerate(self._values)])

            def slice(self, start=None, end=None):
                return ListVector(self._values[start:end])
    """

    #: Marker checked by the storage heuristics, only Arrow storage sets it.
    is_columnar = False

    length: int

    @abc.abstractmethod
    def get(self, i: int) -> Any:
        """Get the value at position ``i``."""
        ...

    @abc.abstractmethod
    def to_list(self) -> list[Any]:
        """Copy all the values into a new Python list, preserving their order."""
        ...

    @abc.abstractmethod
    def sum(self) -> Any:
        """Sum of the values.

        Returns ``None`` when the column is not numeric,
        which is different from a column that sums to ``0``.
        """
        ...

    @abc.abstractmethod
    def map(self, fn: Callable[[Any, int], Any]) -> "ColumnVector":
        """Apply ``fn(value, index)`` to every value and return a new vector."""
        ...

    @abc.abstractmethod
    def slice(self, start: int | None = None, end: int | None = None) -> "ColumnVector":
        """New vector with the values in the ``[start, end)`` range.

        Follows the same rules as slicing a Python list,
        so negative and out of range bounds are accepted.
        """
        ...

    def to_json(self) -> Any:
        """Value to use when serializing the vector to JSON."""
        return self.to_list()

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __repr__(self) -> str:
        preview = ", ".join(repr(v) for v in self.slice(0, 5).to_list())
        if self.length > 5:
            preview += ", ..."
        return f"{self.__class__.__name__}([{preview}], length={self.length})"


def slice_bounds(length: int, start: int | None, end: int | None) -> tuple[int, int]:
    """Resolve slice bounds the way Python lists do."""
    start, end, _ = slice(start, end).indices(length)
    return start, max(start, end)
