"""The Table container and its construction.

A :class:`Table` is a struct of arrays: an ordered mapping
of column names to :class:`tinyframe.storage.base.ColumnVector`,
where all columns have the same number of rows.

Tables are usually built with :func:`create_table`, which accepts
data oriented by rows or by columns, or another table to clone:

>>> table = create_table([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}])
>>> table.row_count, table.column_names
(2, ['a', 'b'])
>>> table.dtypes["a"].value, table.column("b").to_list()
('u8', ['x', 'y'])

The storage of each column is detected from its values
using :func:`tinyframe.storage.dtypes.infer_dtype`: numeric
columns get a buffer of the narrowest type able to
hold their values, all other columns keep the values as they are.

How the input data is copied is controlled by the ``copy`` option:

* ``"none"``: buffers and lists are shared with the input data,
  changing them will change the table too.
* ``"shallow"``: buffers and lists are copied, but not the objects they contain.
* ``"deep"``: all the values are recursively copied.
"""

import copy as copylib
import dataclasses
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

import numpy as np

from ..storage.base import ColumnVector
from ..storage.dense import DenseNumericVector
from ..storage.dtypes import DType, dtype_from_buffer, infer_dtype, is_numeric_dtype, to_dense
from ..storage.generic import GenericVector
from ..utils.typecheck import is_dense_buffer, is_sequence
from .validators import (
    FrameConstructionError,
    validate_column_data,
    validate_column_lengths,
    validate_column_names,
    validate_copy_policy,
    validate_records,
)


@dataclasses.dataclass(frozen=True)
class TableOptions:
    """Options controlling how a table is built.

    :param use_dense_numeric: Store numeric columns in fixed width buffers.
    :param copy: How input data is copied, one of ``"none"``,
                 ``"shallow"``, ``"deep"``.
    :param save_raw: Make :meth:`Table.raw_columns` available.
    :param freeze: Forbid adding or replacing columns once built.
    """

    use_dense_numeric: bool = True
    copy: str = "shallow"
    save_raw: bool = False
    freeze: bool = False

    def __post_init__(self) -> None:
        validate_copy_policy(self.copy)


class Table:
    """Named columns sharing the same number of rows.

    The order of the columns is the order they were provided in.
    """

    def __init__(
        self,
        columns: Mapping[str, ColumnVector],
        dtypes: Mapping[str, DType] | None = None,
        row_count: int | None = None,
        save_raw: bool = False,
    ) -> None:
        """
        :param columns: The vectors of the columns, by name.
        :param dtypes: The DType of the columns, when omitted it is
                       taken from the storage of each vector.
        :param row_count: Expected number of rows, required only
                          to build tables with rows but no columns.
        :param save_raw: Make :meth:`raw_columns` available.
        """
        validate_column_names(columns)
        self._row_count = validate_column_lengths(columns, row_count)
        self._columns = dict(columns)
        dtypes = dtypes or {}
        self._dtypes = {
            name: dtypes.get(name) or _vector_dtype(vector)
            for name, vector in self._columns.items()
        }
        self._save_raw = save_raw
        self._raw_columns = None
        self._frozen = False

    def __repr__(self) -> str:
        return f"Table(columns={self.column_names}, rows={self.row_count})"

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def column_names(self) -> list[str]:
        return list(self._columns)

    @property
    def columns(self) -> Mapping[str, ColumnVector]:
        """Read only view of the columns, by name."""
        return MappingProxyType(self._columns)

    @property
    def dtypes(self) -> Mapping[str, DType]:
        """Read only view of the DType of each column."""
        return MappingProxyType(self._dtypes)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: str) -> bool:
        return name in self._columns

    def column(self, name: str) -> ColumnVector:
        """Get the vector of a column."""
        try:
            return self._columns[name]
        except KeyError:
            raise ColumnNotFoundError(f"Column {name!r} not found") from None

    def add_column(self, name: str, vector: ColumnVector, dtype: DType | None = None) -> None:
        """Append a new column at the end of the table."""
        self._check_writable()
        if name in self._columns:
            raise FrameConstructionError(f"Duplicate column name: {name!r}")
        validate_column_names([name])
        self._bind(name, vector, dtype)

    def replace_column(self, name: str, vector: ColumnVector, dtype: DType | None = None) -> None:
        """Bind an existing column to a different vector.

        The position of the column in the table doesn't change.
        """
        self._check_writable()
        if name not in self._columns:
            raise ColumnNotFoundError(f"Column {name!r} not found")
        self._bind(name, vector, dtype)

    def freeze(self) -> None:
        """Forbid adding or replacing columns from now on.

        The vectors themselves are already immutable.
        """
        self._frozen = True

    def raw_columns(self) -> dict[str, list[Any]]:
        """Plain Python lists with the values of every column.

        The values are read from the vectors the first time they are
        requested and cached until a column of the table is added or
        replaced. Each call returns new lists, so changing them
        never affects the cache.
        Only available on tables built with ``save_raw=True``.
        """
        if not self._save_raw:
            raise ValueError("Raw columns not retained, build the table with save_raw=True")
        if self._raw_columns is None:
            self._raw_columns = {
                name: vector.to_list() for name, vector in self._columns.items()
            }
        return {name: list(values) for name, values in self._raw_columns.items()}

    def _check_writable(self) -> None:
        if self._frozen:
            raise FrozenTableError("Cannot change the columns of a frozen table")

    def _bind(self, name: str, vector: ColumnVector, dtype: DType | None) -> None:
        if self._columns:
            validate_column_lengths({name: vector}, self._row_count)
        else:
            self._row_count = len(vector)
        self._columns[name] = vector
        self._dtypes[name] = dtype or _vector_dtype(vector)
        self._raw_columns = None


def create_table(data: Any, options: TableOptions | None = None, **kwargs: Any) -> Table:
    """Build a table from rows, columns or another table.

    :param data: A sequence of mappings (one per row),
                 a mapping of column names to sequences, numpy
                 buffers or vectors, or a :class:`Table` to clone.
    :param options: The :class:`TableOptions` to build with.
    :param kwargs: Options to set or override, same as
                   the fields of :class:`TableOptions`.
    """
    if options is None:
        options = TableOptions(**kwargs)
    elif kwargs:
        options = dataclasses.replace(options, **kwargs)

    if data is None:
        raise FrameConstructionError("Input data cannot be None")
    if isinstance(data, Table):
        table = _clone_table(data, options)
    elif isinstance(data, Mapping):
        table = _table_from_columns(data, options)
    elif is_sequence(data):
        table = _table_from_records(data, options)
    else:
        raise FrameConstructionError(
            f"Unsupported input data {type(data).__name__}, "
            "expected rows, columns or a table"
        )

    if options.freeze:
        table.freeze()
    return table


def _table_from_records(rows: Sequence[Mapping[str, Any]], options: TableOptions) -> Table:
    if len(rows) == 0:
        return Table({}, save_raw=options.save_raw)
    validate_records(rows)

    columns = {}
    dtypes = {}
    for name in rows[0].keys():
        values = [row.get(name) for row in rows]
        columns[name], dtypes[name] = _vector_from_values(values, options, owned=True)
    return Table(columns, dtypes, row_count=len(rows), save_raw=options.save_raw)


def _table_from_columns(data: Mapping[str, Any], options: TableOptions) -> Table:
    validate_column_names(data)
    for name, values in data.items():
        validate_column_data(name, values)
    row_count = validate_column_lengths(data)

    columns = {}
    dtypes = {}
    for name, values in data.items():
        if isinstance(values, ColumnVector):
            columns[name] = _copy_vector(values, options.copy)
            dtypes[name] = _vector_dtype(values)
        elif is_dense_buffer(values):
            buffer = values if options.copy == "none" else values.copy()
            columns[name] = DenseNumericVector(buffer)
            dtypes[name] = dtype_from_buffer(buffer)
        else:
            columns[name], dtypes[name] = _vector_from_values(values, options)
    return Table(columns, dtypes, row_count=row_count, save_raw=options.save_raw)


def _clone_table(source: Table, options: TableOptions) -> Table:
    columns = {
        name: _copy_vector(vector, options.copy)
        for name, vector in source.columns.items()
    }
    return Table(
        columns, source.dtypes, row_count=source.row_count, save_raw=options.save_raw
    )


def _vector_from_values(
    values: Sequence[Any], options: TableOptions, owned: bool = False
) -> tuple[ColumnVector, DType]:
    """Store a sequence of values in the storage matching their DType.

    :param owned: The sequence was created by the caller and
                  can be used by the vector without copying it.
    """
    if isinstance(values, np.ndarray):
        values, owned = values.tolist(), True

    dtype = infer_dtype(values)
    if options.use_dense_numeric and is_numeric_dtype(dtype):
        try:
            buffer, dtype = to_dense(values, dtype)
            return DenseNumericVector(buffer), dtype
        except OverflowError:
            # Integers beyond the f64 range can only be kept as objects.
            dtype = DType.STR

    if owned or options.copy == "none":
        return GenericVector(values, copy=False), dtype
    if options.copy == "deep":
        return GenericVector(copylib.deepcopy(values), copy=False), dtype
    return GenericVector(values), dtype


def _copy_vector(vector: ColumnVector, policy: str) -> ColumnVector:
    """Copy a vector according to a copy policy.

    Arrow arrays are immutable, so columnar vectors are always shared.
    """
    if policy == "none":
        return vector
    if isinstance(vector, DenseNumericVector):
        return DenseNumericVector(vector.to_numpy().copy())
    if isinstance(vector, GenericVector):
        values = vector.to_list()
        if policy == "deep":
            values = copylib.deepcopy(values)
        return GenericVector(values, copy=False)
    return vector


def _vector_dtype(vector: ColumnVector) -> DType:
    if isinstance(vector, DenseNumericVector):
        return vector.dtype
    return DType.STR


class ColumnNotFoundError(KeyError):
    """The requested column doesn't exist in the table."""

    def __str__(self) -> str:
        # KeyError would show the message quoted.
        return str(self.args[0])


class FrozenTableError(TypeError):
    """Columns were added or replaced on a frozen table."""

    pass
