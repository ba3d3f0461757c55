"""Tables of named columns.

A :class:`Table` is the struct of arrays holding the
columns of a dataframe, each column stored in a
:class:`tinyframe.storage.ColumnVector`.

* :func:`create_table` builds tables from rows, columns or other tables.
* :func:`optimize_storage` converts the storage of the columns
  of a table to speed up an operation that is about to run.
"""

from .optimizer import COLUMNAR_OPERATIONS, DENSE_OPERATIONS, optimize_storage
from .table import ColumnNotFoundError, FrozenTableError, Table, TableOptions, create_table
from .validators import ColumnLengthMismatchError, FrameConstructionError, InvalidColumnError

__all__ = (
    "Table",
    "TableOptions",
    "create_table",
    "optimize_storage",
    "COLUMNAR_OPERATIONS",
    "DENSE_OPERATIONS",
    "FrameConstructionError",
    "ColumnLengthMismatchError",
    "InvalidColumnError",
    "ColumnNotFoundError",
    "FrozenTableError",
)
