import math

import numpy as np
import pyarrow as pa
import pytest

from tinyframe.frame import (
    ColumnLengthMismatchError,
    ColumnNotFoundError,
    FrameConstructionError,
    FrozenTableError,
    InvalidColumnError,
    Table,
    TableOptions,
    create_table,
)
from tinyframe.storage import ColumnarVector, DenseNumericVector, DType, GenericVector


@pytest.fixture
def people():
    return create_table({"name": ["Alice", "Bob", "Carol"], "age": [25, 30, 35]})


def test_table_from_records():
    table = create_table([{"a": 1, "b": "x"}, {"a": 300, "b": "y"}])
    assert table.row_count == 2
    assert table.column_names == ["a", "b"]
    assert table.dtypes == {"a": DType.U16, "b": DType.STR}
    assert isinstance(table.column("a"), DenseNumericVector)
    assert isinstance(table.column("b"), GenericVector)
    assert table.column("a").to_list() == [1, 300]
    assert table.column("b").to_list() == ["x", "y"]


def test_records_missing_keys_are_null():
    table = create_table([{"a": 1, "b": "x"}, {"a": 2}])
    assert table.column("b").to_list() == ["x", None]


def test_records_names_come_from_first_row():
    table = create_table([{"a": 1}, {"a": 2, "b": "ignored"}])
    assert table.column_names == ["a"]


def test_empty_records():
    table = create_table([])
    assert table.row_count == 0
    assert table.column_names == []


def test_table_from_columns(people):
    assert people.row_count == 3
    assert people.column_names == ["name", "age"]
    assert people.dtypes["age"] == DType.U8
    assert people.column("age").to_numpy().dtype == np.uint8
    assert people.column("name").to_list() == ["Alice", "Bob", "Carol"]


def test_integer_columns_with_nulls_become_floats():
    table = create_table({"v": [1, None, 3]})
    assert table.dtypes["v"] == DType.F64
    values = table.column("v").to_list()
    assert values[0] == 1.0 and math.isnan(values[1])


def test_columns_without_dense_storage():
    table = create_table({"v": [1, 2, 3]}, use_dense_numeric=False)
    assert isinstance(table.column("v"), GenericVector)
    assert table.dtypes["v"] == DType.U8


def test_boolean_columns_are_generic():
    table = create_table({"flag": [True, False]})
    assert table.dtypes["flag"] == DType.BOOL
    assert isinstance(table.column("flag"), GenericVector)


def test_columns_of_vectors_and_arrays():
    vector = ColumnarVector(pa.array(["a", "b"]))
    table = create_table({
        "text": vector,
        "buffer": np.array([1.5, 2.5], dtype=np.float32),
        "numpy_values": np.array([7, 8]),
    })
    assert table.column("text") is vector
    assert table.dtypes["buffer"] == DType.F32
    assert table.dtypes["numpy_values"] == DType.I64


def test_copy_none_shares_input():
    buffer = np.array([1, 2, 3], dtype=np.int32)
    values = ["a", "b", "c"]
    table = create_table({"n": buffer, "s": values}, copy="none")
    buffer[0] = 100
    values[0] = "z"
    assert table.column("n").get(0) == 100
    assert table.column("s").get(0) == "z"


def test_copy_shallow_copies_containers():
    buffer = np.array([1, 2], dtype=np.int32)
    cell = {"k": 1}
    values = [cell, "b"]
    table = create_table({"n": buffer, "s": values}, copy="shallow")
    buffer[0] = 100
    values[1] = "z"
    cell["k"] = 2
    assert table.column("n").get(0) == 1
    assert table.column("s").get(1) == "b"
    assert table.column("s").get(0) == {"k": 2}


def test_copy_deep_copies_cells():
    cell = {"k": 1}
    table = create_table({"s": [cell, "b"]}, copy="deep")
    cell["k"] = 2
    assert table.column("s").get(0) == {"k": 1}


def test_invalid_copy_policy():
    with pytest.raises(ValueError, match="Invalid copy policy"):
        create_table({"a": [1]}, copy="sometimes")
    with pytest.raises(ValueError, match="Invalid copy policy"):
        TableOptions(copy="always")


def test_options_object_and_overrides():
    options = TableOptions(use_dense_numeric=False)
    table = create_table({"a": [1, 2]}, options, freeze=True)
    assert isinstance(table.column("a"), GenericVector)
    assert table.is_frozen


def test_clone_table(people):
    clone = create_table(people)
    assert clone is not people
    assert clone.column_names == people.column_names
    assert clone.dtypes == people.dtypes
    assert clone.column("age") is not people.column("age")
    assert clone.column("age").to_list() == [25, 30, 35]

    clone.column("age").to_numpy()[0] = 99
    assert people.column("age").get(0) == 25


def test_clone_without_copy_shares_vectors(people):
    clone = create_table(people, copy="none")
    assert clone.column("age") is people.column("age")


def test_clone_shares_columnar_vectors():
    vector = ColumnarVector(pa.array(["a"]))
    table = Table({"a": vector})
    assert create_table(table, copy="deep").column("a") is vector


def test_none_input():
    with pytest.raises(FrameConstructionError, match="Input data cannot be None"):
        create_table(None)


def test_unsupported_input():
    with pytest.raises(FrameConstructionError, match="Unsupported input data int"):
        create_table(42)


def test_length_mismatch():
    with pytest.raises(ColumnLengthMismatchError, match="column 'b' has 1 rows, expected 2"):
        create_table({"a": [1, 2], "b": [3]})


def test_invalid_column():
    with pytest.raises(InvalidColumnError, match="Column 'b'"):
        create_table({"a": [1, 2], "b": 5})


def test_rows_must_be_mappings():
    with pytest.raises(FrameConstructionError, match="Row 1 must be a mapping"):
        create_table([{"a": 1}, [2]])


def test_column_not_found(people):
    with pytest.raises(ColumnNotFoundError, match="Column 'height' not found"):
        people.column("height")
    with pytest.raises(KeyError):
        people.column("height")


def test_contains(people):
    assert "name" in people
    assert "height" not in people


def test_columns_view_is_read_only(people):
    with pytest.raises(TypeError):
        people.columns["other"] = GenericVector([1, 2, 3])
    with pytest.raises(TypeError):
        people.dtypes["age"] = DType.F64


def test_add_and_replace_column(people):
    people.add_column("city", GenericVector(["Rome", "Oslo", "Lima"]))
    assert people.column_names == ["name", "age", "city"]
    assert people.dtypes["city"] == DType.STR

    people.replace_column("age", DenseNumericVector(np.array([1.0, 2.0, 3.0])))
    assert people.column_names == ["name", "age", "city"]
    assert people.dtypes["age"] == DType.F64

    with pytest.raises(FrameConstructionError, match="Duplicate column name"):
        people.add_column("city", GenericVector(["a", "b", "c"]))
    with pytest.raises(ColumnNotFoundError):
        people.replace_column("height", GenericVector(["a", "b", "c"]))
    with pytest.raises(ColumnLengthMismatchError):
        people.add_column("short", GenericVector(["a"]))


def test_add_column_to_empty_table():
    table = Table({})
    table.add_column("a", GenericVector(["x", "y"]))
    assert table.row_count == 2


def test_rows_without_columns():
    assert Table({}, row_count=4).row_count == 4


def test_frozen_table(people):
    frozen = create_table(people, freeze=True)
    assert frozen.is_frozen
    with pytest.raises(FrozenTableError):
        frozen.add_column("city", GenericVector(["a", "b", "c"]))
    with pytest.raises(FrozenTableError):
        frozen.replace_column("age", GenericVector(["a", "b", "c"]))


def test_raw_columns():
    table = create_table({"a": [1, 2], "b": ["x", "y"]}, save_raw=True)
    assert table.raw_columns() == {"a": [1, 2], "b": ["x", "y"]}

    table.replace_column("b", GenericVector(["z", "w"]))
    assert table.raw_columns()["b"] == ["z", "w"]


def test_raw_columns_are_read_once():
    calls = []

    class CountingVector(GenericVector):
        def to_list(self):
            calls.append(1)
            return super().to_list()

    table = Table({"a": CountingVector(["x", "y"])}, save_raw=True)
    table.raw_columns()
    table.raw_columns()
    assert len(calls) == 1


def test_raw_columns_changes_do_not_leak():
    table = create_table({"a": [1, 2]}, save_raw=True)
    raw = table.raw_columns()
    raw["a"].append(3)
    raw["b"] = ["x"]
    assert table.raw_columns() == {"a": [1, 2]}


def test_raw_columns_not_saved(people):
    with pytest.raises(ValueError, match="save_raw=True"):
        people.raw_columns()


def test_dtype_override():
    table = Table({"a": GenericVector([1, 2])}, {"a": DType.U8})
    assert table.dtypes["a"] == DType.U8
    assert Table({"a": GenericVector([1, 2])}).dtypes["a"] == DType.STR


def test_repr(people):
    assert repr(people) == "Table(columns=['name', 'age'], rows=3)"


def test_numbers_beyond_float_range_are_kept_as_objects():
    huge = 10**400
    table = create_table({"a": [huge, 1]})
    assert isinstance(table.column("a"), GenericVector)
    assert table.dtypes["a"] == DType.STR
    assert table.column("a").to_list() == [huge, 1]

    table = create_table([{"a": huge}, {"a": None}])
    assert table.column("a").to_list() == [huge, None]
