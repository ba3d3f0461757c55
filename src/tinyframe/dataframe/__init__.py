"""Dataframe library built on top of TinyFrame storage.

A dataframe library is a tool designed to handle and manipulate structured data,
typically in the form of tables (i.e., rows and columns).
It allows users to load data, explore it, apply transformations, and analyze it.

The :class:`DataFrame` and :class:`Series` objects are thin wrappers
around a :class:`tinyframe.frame.Table` and its column vectors.
All the work of storing the data is done by the storage layer,
the dataframe only exposes it in a convenient form:

>>> df = DataFrame({"name": ["Alice", "Bob"], "age": [25, 30]})
>>> df.columns, df.row_count
(['name', 'age'], 2)
>>> df["age"].sum()
55
"""

from .dataframe import DataFrame
from .series import Series

__all__ = ("DataFrame", "Series")
