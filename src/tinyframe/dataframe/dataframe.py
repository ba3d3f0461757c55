"""The Dataframe object itself."""
from collections.abc import Mapping, Sequence
from typing import Any, Self

import pyarrow as pa

from ..frame import Table, create_table, optimize_storage
from ..frame.validators import validate_records
from ..storage.base import ColumnVector
from ..storage.columnar import ColumnarVector
from ..storage.dense import DenseNumericVector
from ..storage.factory import make_vector
from ..utils import tabulate
from .series import Series


class DataFrame:
  """Data structure that handles data in rows and columns.

  The DataFrame object allows to represent in-memory data
  and perform transformations over it.

  Data is held in a :class:`tinyframe.frame.Table`, each
  column is a vector whose storage was picked according to
  its content. Transformations never modify the columns,
  they return a new DataFrame instead.
  """
  def __init__(self, data: Any = None, **options: Any) -> None:
    """
    :param data: A :class:`tinyframe.frame.Table` or any data
                 accepted by :func:`tinyframe.frame.create_table`.
    :param options: The table options, see :class:`tinyframe.frame.TableOptions`.
    """
    if isinstance(data, Table) and not options:
      self.table = data
    else:
      self.table = create_table({} if data is None else data, **options)

  @classmethod
  def from_columns(cls, columns: Mapping[str, Any], **vector_options: Any) -> Self:
    """Create a DataFrame storing each column through the vector factory.

    Unlike the constructor, columns of text are stored in
    columnar format unless told otherwise by the options.

    :param columns: The values of each column by name.
    :param vector_options: Storage preferences,
                           see :meth:`tinyframe.storage.VectorFactory.from_data`.
    """
    vectors = {
      name: make_vector(values.vector if isinstance(values, Series) else values, **vector_options)
      for name, values in columns.items()
    }
    return cls(Table(vectors))

  @classmethod
  def from_records(cls, rows: Sequence[Mapping[str, Any]], **vector_options: Any) -> Self:
    """Create a DataFrame from rows, storing each column through the vector factory.

    The names of the columns are the keys of the first row.
    """
    if not rows:
      return cls(Table({}))
    validate_records(rows)
    columns = {name: [row.get(name) for row in rows] for name in rows[0]}
    return cls.from_columns(columns, **vector_options)

  @classmethod
  def from_arrow(cls, table: pa.Table) -> Self:
    """Create a DataFrame sharing the columns of a :class:`pyarrow.Table`."""
    return cls(Table({
      name: ColumnarVector(table.column(name)) for name in table.column_names
    }))

  def to_arrow(self) -> pa.Table:
    """Convert the DataFrame into a :class:`pyarrow.Table`."""
    arrays = {}
    for name, vector in self.table.columns.items():
      if isinstance(vector, ColumnarVector):
        arrays[name] = vector.to_arrow()
      elif isinstance(vector, DenseNumericVector):
        arrays[name] = pa.array(vector.to_numpy())
      else:
        arrays[name] = pa.array(vector.to_list())
    return pa.table(arrays)

  def to_columns(self) -> dict[str, list[Any]]:
    return {name: vector.to_list() for name, vector in self.table.columns.items()}

  def to_records(self) -> list[dict[str, Any]]:
    columns = self.to_columns()
    return [dict(zip(columns, row)) for row in zip(*columns.values())]

  @property
  def columns(self) -> list[str]:
    return self.table.column_names

  @property
  def row_count(self) -> int:
    return self.table.row_count

  def __len__(self) -> int:
    return self.table.row_count

  def col(self, name: str) -> Series:
    """Get a column as a :class:`Series`."""
    return Series(self.table.column(name), name=name)

  __getitem__ = col

  def get_vector(self, name: str) -> ColumnVector:
    """Get the vector storing a column."""
    return self.table.column(name)

  def sum(self, name: str) -> Any:
    return self.table.column(name).sum()

  def select(self, names: Sequence[str]) -> Self:
    """New DataFrame with only the given columns, in the given order."""
    return self.__class__(Table(
      {name: self.table.column(name) for name in names},
      self.table.dtypes,
      row_count=self.row_count,
    ))

  def drop(self, names: Sequence[str]) -> Self:
    """New DataFrame without the given columns."""
    return self.select([name for name in self.columns if name not in names])

  def assign(self, **columns: Any) -> Self:
    """New DataFrame with columns added or replaced.

    Columns can be provided as a :class:`Series`, a vector
    or any data accepted by :func:`tinyframe.storage.make_vector`.
    """
    vectors = dict(self.table.columns)
    dtypes = {name: dtype for name, dtype in self.table.dtypes.items() if name not in columns}
    for name, values in columns.items():
      vectors[name] = values.vector if isinstance(values, Series) else make_vector(values)
    return self.__class__(Table(
      vectors, dtypes, row_count=self.row_count if self.columns else None
    ))

  def optimize_for(self, operation: str) -> Self:
    """Convert the storage of the columns for an upcoming operation.

    See :func:`tinyframe.frame.optimize_storage`, the DataFrame
    is modified in place and returned for chaining.
    """
    optimize_storage(self.table, operation)
    return self

  def __str__(self) -> str:
    return tabulate.tabulate(self.table)

  def __repr__(self) -> str:
    return f"DataFrame(columns={self.columns}, rows={self.row_count})"
