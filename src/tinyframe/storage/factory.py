"""Build the right column vector for some data.

The :class:`VectorFactory` is the single entry point that
turns raw column data into a :class:`tinyframe.storage.base.ColumnVector`.

Data that is already stored in a backend is wrapped as is,
without copying it:

* A :class:`pyarrow.Array` becomes a :class:`tinyframe.storage.columnar.ColumnarVector`.
* A numeric ``numpy`` array becomes a :class:`tinyframe.storage.dense.DenseNumericVector`.

Any other sequence goes through
:func:`tinyframe.storage.selection.should_use_columnar` to decide
if it should be converted to columnar storage. When it is not,
or when the columnar backend fails or is not available,
purely numeric data is stored in a ``float64`` buffer
and everything else in a :class:`tinyframe.storage.generic.GenericVector`.

Failing to use the columnar backend is never an error,
the factory logs a warning and falls back to the other
storage types, the values of the column are the same
whatever storage ends up being used:

>>> make_vector(["apple", "banana", "cherry"]).is_columnar
True
>>> factory = VectorFactory(DisabledColumnarBackend())
>>> factory.from_data(["apple", "banana", "cherry"]).to_list()
['apple', 'banana', 'cherry']
"""

import logging
from typing import Any

import numpy as np
import pyarrow as pa

from ..utils.typecheck import is_columnar_handle, is_dense_buffer, is_number, is_sequence
from .backends import (
    ArrowColumnarBackend,
    ColumnarBackend,
    ColumnarBackendError,
    DisabledColumnarBackend,
)
from .base import ColumnVector
from .columnar import ColumnarVector
from .dense import DenseNumericVector
from .generic import GenericVector
from .selection import should_use_columnar

logger = logging.getLogger(__name__)


class VectorFactory:
    """Create column vectors choosing their storage backend.

    The factory is bound to a columnar backend when created,
    which is the one it will use for columnar storage.
    """

    def __init__(self, backend: ColumnarBackend | None = None) -> None:
        """
        :param backend: The backend used for columnar storage,
                        Apache Arrow when not provided.
        """
        self.backend = backend if backend is not None else ArrowColumnarBackend()

    def __repr__(self) -> str:
        return f"VectorFactory(backend={self.backend!r})"

    def from_data(
        self,
        data: Any,
        *,
        prefer_columnar: bool | None = None,
        always_columnar: bool = False,
        never_columnar: bool = False,
    ) -> ColumnVector:
        """Create a column vector holding the given data.

        :param data: A sequence of values, a numpy buffer,
                     an Arrow array or an existing vector.
        :param prefer_columnar: When set, decides the columnar
                                storage in place of the heuristics.
        :param always_columnar: See :func:`should_use_columnar`.
        :param never_columnar: See :func:`should_use_columnar`.
        """
        if data is None:
            raise ValueError("Column data cannot be None")

        if isinstance(data, ColumnVector):
            return data
        if is_columnar_handle(data):
            if not isinstance(data, pa.Array | pa.ChunkedArray):
                raise TypeError(f"Unsupported columnar data: {type(data).__name__}")
            return ColumnarVector(data)
        if is_dense_buffer(data):
            return DenseNumericVector(data)

        if not is_sequence(data):
            raise TypeError(
                f"Cannot build a column vector from {type(data).__name__}, a sequence is required"
            )
        values = data.tolist() if isinstance(data, np.ndarray) else data

        use_columnar = prefer_columnar
        if use_columnar is None:
            use_columnar = should_use_columnar(
                values, always_columnar=always_columnar, never_columnar=never_columnar
            )

        if use_columnar and self.backend.is_available():
            try:
                return ColumnarVector(self.backend.vector_from_sequence(values))
            except ColumnarBackendError as e:
                logger.warning(
                    "Columnar backend %s failed, falling back to numeric or generic storage: %s",
                    self.backend.name,
                    e,
                )
        elif use_columnar:
            logger.warning(
                "Columnar backend %s not available, falling back to numeric or generic storage",
                self.backend.name,
            )

        if all(is_number(v) for v in values):
            try:
                return DenseNumericVector(np.array(values, dtype=np.float64))
            except OverflowError as e:
                logger.warning("Numbers out of float64 range, using generic storage: %s", e)
        return GenericVector(values)


#: Factory used when no other factory is explicitly provided.
default_factory = VectorFactory()


def make_vector(data: Any, **options: Any) -> ColumnVector:
    """Create a column vector using the default factory.

    Accepts the same options as :meth:`VectorFactory.from_data`.
    """
    return default_factory.from_data(data, **options)
