"""Column storage.

Each column of a TinyFrame table is stored in a
:class:`ColumnVector`, an object that hides the
physical layout of the values behind a small interface
(``get``, ``to_list``, ``sum``, ``map``, ``slice``).

Three layouts are available:

* **Generic**, :class:`GenericVector`: Python objects in a list.
  Works for any value, used for text and mixed columns.
* **Dense numeric**, :class:`DenseNumericVector`: numbers in a
  fixed width ``numpy`` buffer, the narrowest that can hold them
  according to :func:`infer_dtype`.
* **Columnar**, :class:`ColumnarVector`: an Apache Arrow array,
  efficient for text, missing values and very large columns.

The storage of a column is usually chosen by the :class:`VectorFactory`,
which relies on :func:`should_use_columnar` to decide
if the Arrow format is worth it for the given data:

>>> make_vector([1, 2, 3]).to_list()
[1.0, 2.0, 3.0]
>>> type(make_vector(["a", "b"])).__name__
'ColumnarVector'
>>> type(make_vector([1, "a"], never_columnar=True)).__name__
'GenericVector'
"""

from .backends import (
    ArrowColumnarBackend,
    ColumnarBackend,
    ColumnarBackendError,
    ColumnarBackendUnavailable,
    ColumnarConversionError,
    DisabledColumnarBackend,
    get_columnar_backend,
)
from .base import ColumnVector
from .columnar import ColumnarVector
from .dense import DenseNumericVector
from .dtypes import DType, infer_dtype
from .factory import VectorFactory, default_factory, make_vector
from .generic import GenericVector
from .selection import LARGE_COLUMN_THRESHOLD, should_use_columnar

__all__ = (
    "ColumnVector",
    "GenericVector",
    "DenseNumericVector",
    "ColumnarVector",
    "DType",
    "infer_dtype",
    "VectorFactory",
    "default_factory",
    "make_vector",
    "should_use_columnar",
    "LARGE_COLUMN_THRESHOLD",
    "ColumnarBackend",
    "ArrowColumnarBackend",
    "DisabledColumnarBackend",
    "get_columnar_backend",
    "ColumnarBackendError",
    "ColumnarBackendUnavailable",
    "ColumnarConversionError",
)
