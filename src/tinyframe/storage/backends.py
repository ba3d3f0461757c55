"""Columnar backends available to the vector factory.

The columnar storage is provided by a backend object that the
:class:`tinyframe.storage.factory.VectorFactory` receives when created.
The factory asks the backend if it is available and, if so,
asks it to convert a sequence of Python values into a columnar array.

Keeping the backend as an explicit object means the
fallback paths of the factory can be exercised simply
by giving it a backend that is not available:

>>> get_columnar_backend("disabled").is_available()
False
>>> get_columnar_backend("arrow").is_available()
True

The Arrow backend picks the type of the array from the
kind of values in the sequence:

======================  ======================
Values                  Arrow type
======================  ======================
``str``                 ``string``
numbers                 ``float64``
``bool``                ``bool``
``date``/``datetime``   ``timestamp[ms]``
anything else           ``string`` (JSON text)
======================  ======================

Sequences mixing more than one of those kinds can't be
stored in a single typed array and are rejected
with a :class:`ColumnarConversionError`.
"""

import abc
import datetime
import json
from collections.abc import Sequence
from typing import Any

import pyarrow as pa

from ..utils.typecheck import is_bool, is_null, is_number, is_string


class ColumnarBackend(abc.ABC):
    """Capability to build columnar arrays from Python values."""

    name: str

    @abc.abstractmethod
    def is_available(self) -> bool:
        """If the backend can currently build arrays."""
        ...

    @abc.abstractmethod
    def vector_from_sequence(self, values: Sequence[Any]) -> Any:
        """Build a columnar array holding the given values.

        Must raise :class:`ColumnarBackendError` when
        the values can't be converted.
        """
        ...


class ArrowColumnarBackend(ColumnarBackend):
    """Build columnar arrays using Apache Arrow."""

    name = "arrow"

    def is_available(self) -> bool:
        return True

    def vector_from_sequence(self, values: Sequence[Any]) -> pa.Array:
        kinds = {_value_kind(v) for v in values if not is_null(v)}
        if len(kinds) > 1:
            raise ColumnarConversionError(
                f"Cannot store mixed {', '.join(sorted(kinds))} values in a columnar array"
            )
        kind = kinds.pop() if kinds else "number"

        if kind != "number":
            # NaN is only a valid value for float arrays.
            values = [None if is_null(v) else v for v in values]
        if kind == "date":
            values = [_as_datetime(v) for v in values]
        elif kind == "object":
            values = [None if is_null(v) else json.dumps(v, default=str) for v in values]

        try:
            return pa.array(values, type=_ARROW_TYPES[kind], from_pandas=False)
        except (pa.ArrowException, TypeError, ValueError, OverflowError) as e:
            raise ColumnarConversionError(f"Arrow conversion failed: {e}") from e

    def __repr__(self) -> str:
        return "ArrowColumnarBackend()"


class DisabledColumnarBackend(ColumnarBackend):
    """A backend that is never available.

    Forces the factory to always use numeric or generic storage.
    """

    name = "disabled"

    def is_available(self) -> bool:
        return False

    def vector_from_sequence(self, values: Sequence[Any]) -> Any:
        raise ColumnarBackendUnavailable("The columnar backend is disabled")

    def __repr__(self) -> str:
        return "DisabledColumnarBackend()"


COLUMNAR_BACKENDS: dict[str, type[ColumnarBackend]] = {
    ArrowColumnarBackend.name: ArrowColumnarBackend,
    DisabledColumnarBackend.name: DisabledColumnarBackend,
}


def get_columnar_backend(name: str) -> ColumnarBackend:
    """Create a columnar backend by name."""
    backend = COLUMNAR_BACKENDS.get(name)
    if backend is None:
        raise ValueError(f"Unknown columnar backend: {name}")
    return backend()


_ARROW_TYPES = {
    "string": pa.string(),
    "number": pa.float64(),
    "bool": pa.bool_(),
    "date": pa.timestamp("ms"),
    "object": pa.string(),
}


def _value_kind(value: Any) -> str:
    if is_string(value):
        return "string"
    if is_bool(value):
        return "bool"
    if is_number(value):
        return "number"
    if isinstance(value, datetime.date):
        return "date"
    return "object"


def _as_datetime(value: Any) -> datetime.datetime | None:
    if value is None or isinstance(value, datetime.datetime):
        return value
    return datetime.datetime.combine(value, datetime.time())


class ColumnarBackendError(Exception):
    """Base class for failures of a columnar backend."""

    pass


class ColumnarBackendUnavailable(ColumnarBackendError):
    """The columnar backend can't be used in this runtime."""

    pass


class ColumnarConversionError(ColumnarBackendError):
    """Values could not be converted to a columnar array."""

    pass
