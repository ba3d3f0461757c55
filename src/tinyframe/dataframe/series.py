"""The Series object, a single named column."""

from collections.abc import Callable, Iterator
from typing import Any, Self

from ..storage.base import ColumnVector
from ..storage.factory import make_vector


class Series:
    """A named column of values.

    The values are held by a :class:`tinyframe.storage.ColumnVector`,
    built by the vector factory unless a vector is provided.
    """

    def __init__(self, data: Any, name: str = "", **vector_options: Any) -> None:
        """
        :param data: The values of the series, or the vector holding them.
        :param name: The name of the series.
        :param vector_options: Storage preferences forwarded to
                               :func:`tinyframe.storage.make_vector`.
        """
        self.name = name
        if isinstance(data, ColumnVector):
            self.vector = data
        else:
            self.vector = make_vector(data, **vector_options)

    @property
    def length(self) -> int:
        return self.vector.length

    @property
    def values(self) -> list[Any]:
        return self.vector.to_list()

    def __len__(self) -> int:
        return self.vector.length

    def __iter__(self) -> Iterator[Any]:
        return iter(self.vector)

    def get(self, index: int) -> Any:
        return self.vector.get(index)

    def to_list(self) -> list[Any]:
        return self.vector.to_list()

    def sum(self) -> Any:
        return self.vector.sum()

    def map(self, fn: Callable[[Any, int], Any]) -> Self:
        """New series with ``fn(value, index)`` applied to every value."""
        return self.__class__(self.vector.map(fn), name=self.name)

    def filter(self, predicate: Callable[[Any, int], bool]) -> Self:
        """New series with only the values for which ``predicate(value, index)`` is true."""
        kept = [v for i, v in enumerate(self.vector.to_list()) if predicate(v, i)]
        return self.__class__(kept, name=self.name)

    def slice(self, start: int | None = None, end: int | None = None) -> Self:
        return self.__class__(self.vector.slice(start, end), name=self.name)

    def __repr__(self) -> str:
        preview = ", ".join(str(v) for v in self.vector.slice(0, 5).to_list())
        if self.length > 5:
            preview += f", ... ({self.length} items)"
        return f"Series({preview})"
