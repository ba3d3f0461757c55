"""TinyFrame

A tabular data library storing its columns in the
layout that best fits their content.

TinyFrame provides DataFrame and Series abstractions over
columnar storage. Each column is stored by one of three backends:
plain Python lists, fixed width ``numpy`` buffers or Apache Arrow arrays.
Which backend is used is decided by looking at the data
and can be changed later to speed up upcoming operations.

The library is constituted by multiple components, each isolated within its own
package and each self documented:

* The Storage, :mod:`tinyframe.storage`, in charge of holding the values
  of a single column and deciding how they should be stored.
* The Tables, :mod:`tinyframe.frame`, which group columns together
  and can switch their storage ahead of heavy operations.
* The Dataframe API, :mod:`tinyframe.dataframe`, which provides
  an high level API over tables.

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import dataframe, frame, storage
from .dataframe import DataFrame, Series
from .frame import Table, create_table, optimize_storage
from .storage import infer_dtype, make_vector, should_use_columnar

__all__ = (
    "storage",
    "frame",
    "dataframe",
    "DataFrame",
    "Series",
    "Table",
    "create_table",
    "optimize_storage",
    "infer_dtype",
    "make_vector",
    "should_use_columnar",
)
