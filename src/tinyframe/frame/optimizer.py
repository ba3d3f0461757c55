"""Switch the storage of table columns ahead of bulk operations.

Different operations run faster on different storage:
joins and group-bys compare keys and benefit from Arrow storage,
numeric aggregations and math loop over raw numbers and
benefit from dense buffers.

:func:`optimize_storage` inspects the columns of a table and
rebinds each of them to the storage that best fits the
operation that is about to run. The values of the columns
never change, only how they are stored, so running the
optimizer or not doesn't affect the results of the operation.

>>> from tinyframe.frame.table import create_table
>>> table = create_table({"city": ["Rome", "Paris"], "visits": [3, 5]})
>>> optimize_storage(table, "join")
>>> table.column("city").is_columnar, table.column("visits").is_columnar
(True, True)
>>> optimize_storage(table, "numeric_agg")
>>> table.column("city").is_columnar, table.column("visits").is_columnar
(True, False)

The optimizer rebinds columns in place without any locking,
callers must not run it while other threads use the same table.
"""

import logging

import numpy as np

from ..storage.base import ColumnVector
from ..storage.dense import DenseNumericVector
from ..storage.factory import VectorFactory, default_factory
from ..utils.typecheck import is_finite_number
from .table import Table

logger = logging.getLogger(__name__)

#: Operations that run faster on columnar storage.
COLUMNAR_OPERATIONS = frozenset({"join", "groupby", "string"})

#: Operations that run faster on dense numeric storage.
DENSE_OPERATIONS = frozenset({"numeric_agg", "rolling", "math"})


def optimize_storage(table: Table, operation: str, factory: VectorFactory | None = None) -> None:
    """Convert the columns of a table to the storage preferred by an operation.

    Unknown operations and frozen tables are left untouched.

    :param table: The table whose columns should be converted.
    :param operation: Name of the operation about to run,
                      see :data:`COLUMNAR_OPERATIONS` and :data:`DENSE_OPERATIONS`.
    :param factory: The factory used to build columnar vectors,
                    the default one when not provided.
    """
    if operation in COLUMNAR_OPERATIONS:
        convert = _to_columnar
    elif operation in DENSE_OPERATIONS:
        convert = _to_dense
    else:
        logger.debug("No storage preference for operation %r", operation)
        return

    if table.is_frozen:
        logger.debug("Table is frozen, storage left unchanged for %r", operation)
        return

    factory = factory or default_factory
    for name in table.column_names:
        vector = table.column(name)
        optimized = convert(vector, factory)
        if optimized is not vector:
            logger.debug(
                "Column %r switched from %s to %s for %r",
                name,
                type(vector).__name__,
                type(optimized).__name__,
                operation,
            )
            # Arrow storage keeps the DType detected for the values.
            dtype = table.dtypes[name] if optimized.is_columnar else None
            table.replace_column(name, optimized, dtype)


def _to_columnar(vector: ColumnVector, factory: VectorFactory) -> ColumnVector:
    if vector.is_columnar:
        return vector
    converted = factory.from_data(vector.to_list(), prefer_columnar=True)
    # The factory falls back to other storage when columnar fails.
    return converted if converted.is_columnar else vector


def _to_dense(vector: ColumnVector, factory: VectorFactory) -> ColumnVector:
    if not vector.is_columnar:
        return vector
    values = vector.to_list()
    if not all(is_finite_number(v) for v in values):
        return vector
    return DenseNumericVector(np.array(values, dtype=np.float64))
