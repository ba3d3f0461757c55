import logging

import numpy as np
import pyarrow as pa
import pytest

from tinyframe.storage import (
    ArrowColumnarBackend,
    ColumnarConversionError,
    ColumnarVector,
    DenseNumericVector,
    DisabledColumnarBackend,
    GenericVector,
    VectorFactory,
    make_vector,
)


class FailingBackend(ArrowColumnarBackend):
    name = "failing"

    def vector_from_sequence(self, values):
        raise ColumnarConversionError("conversion exploded")


class ForeignColumnar:
    is_columnar = True


@pytest.fixture
def disabled_factory():
    return VectorFactory(DisabledColumnarBackend())


def test_default_backend_is_arrow():
    assert isinstance(VectorFactory().backend, ArrowColumnarBackend)


def test_existing_vectors_are_returned_as_is():
    vector = GenericVector(["a"])
    assert make_vector(vector) is vector


def test_arrow_arrays_are_wrapped_without_copy():
    array = pa.array(["a", "b"])
    vector = make_vector(array)
    assert isinstance(vector, ColumnarVector)
    assert vector.to_arrow() is array


def test_dense_buffers_are_wrapped_without_copy():
    buffer = np.array([1, 2, 3], dtype=np.int16)
    vector = make_vector(buffer)
    assert isinstance(vector, DenseNumericVector)
    assert vector.to_numpy() is buffer


def test_dense_buffers_ignore_columnar_preference():
    buffer = np.array([1.0, 2.0])
    assert isinstance(make_vector(buffer, always_columnar=True), DenseNumericVector)


def test_text_goes_to_columnar():
    vector = make_vector(["apple", None, "cherry"])
    assert isinstance(vector, ColumnarVector)
    assert vector.to_list() == ["apple", None, "cherry"]


def test_numbers_go_to_dense():
    vector = make_vector([1, 2, 3])
    assert isinstance(vector, DenseNumericVector)
    assert vector.to_numpy().dtype == np.float64
    assert vector.to_list() == [1.0, 2.0, 3.0]


def test_numbers_with_nulls_stay_generic():
    vector = make_vector([1, None, 3])
    assert isinstance(vector, GenericVector)
    assert vector.to_list() == [1, None, 3]


def test_mixed_values_go_to_generic():
    vector = make_vector([1, "a"], never_columnar=True)
    assert isinstance(vector, GenericVector)
    assert vector.to_list() == [1, "a"]


def test_prefer_columnar():
    assert isinstance(make_vector([1, 2], prefer_columnar=True), ColumnarVector)
    assert isinstance(make_vector(["a"], prefer_columnar=False), GenericVector)


def test_always_columnar():
    vector = make_vector([1, 2, 3], always_columnar=True)
    assert isinstance(vector, ColumnarVector)
    assert vector.to_list() == [1.0, 2.0, 3.0]


def test_numpy_sequences_are_converted_to_values():
    vector = make_vector(np.array(["a", "b"], dtype=object))
    assert isinstance(vector, ColumnarVector)
    assert vector.to_list() == ["a", "b"]


def test_disabled_backend_falls_back(disabled_factory, caplog):
    with caplog.at_level(logging.WARNING, logger="tinyframe.storage.factory"):
        vector = disabled_factory.from_data(["apple", "banana", "cherry"])
    assert isinstance(vector, GenericVector)
    assert vector.to_list() == ["apple", "banana", "cherry"]
    assert "not available" in caplog.text


def test_disabled_backend_numeric_fallback(disabled_factory):
    vector = disabled_factory.from_data([1, 2, 3], always_columnar=True)
    assert isinstance(vector, DenseNumericVector)
    assert vector.to_list() == [1.0, 2.0, 3.0]


def test_disabled_backend_without_columnar_request_is_silent(disabled_factory, caplog):
    with caplog.at_level(logging.WARNING, logger="tinyframe.storage.factory"):
        disabled_factory.from_data([1, 2, 3])
    assert caplog.records == []


def test_failing_backend_falls_back(caplog):
    factory = VectorFactory(FailingBackend())
    with caplog.at_level(logging.WARNING, logger="tinyframe.storage.factory"):
        vector = factory.from_data(["a", "b"])
    assert isinstance(vector, GenericVector)
    assert vector.to_list() == ["a", "b"]
    assert "conversion exploded" in caplog.text


def test_mixed_values_requested_as_columnar_fall_back(caplog):
    with caplog.at_level(logging.WARNING, logger="tinyframe.storage.factory"):
        vector = make_vector(["a", 1], always_columnar=True)
    assert isinstance(vector, GenericVector)
    assert "failed" in caplog.text


def test_none_is_rejected():
    with pytest.raises(ValueError, match="cannot be None"):
        make_vector(None)


@pytest.mark.parametrize("data", ["text", 42, {"a": 1}])
def test_non_sequences_are_rejected(data):
    with pytest.raises(TypeError, match="a sequence is required"):
        make_vector(data)


def test_unknown_columnar_handles_are_rejected():
    with pytest.raises(TypeError, match="Unsupported columnar data"):
        make_vector(ForeignColumnar())


@pytest.mark.parametrize(
    "data",
    [
        ["apple", None, "cherry"],
        [1, 2.5, 3],
        [1, None, 3],
        [True, False],
        [{"a": 1}, "b"],
    ],
)
def test_values_survive_any_storage(data):
    assert make_vector(data).to_list() == data
    assert VectorFactory(DisabledColumnarBackend()).from_data(data).to_list() == data


def test_repr():
    assert repr(VectorFactory()) == "VectorFactory(backend=ArrowColumnarBackend())"


def test_numbers_beyond_float_range_stay_generic(caplog):
    huge = 10**400
    with caplog.at_level(logging.WARNING, logger="tinyframe.storage.factory"):
        vector = make_vector([huge, 1])
    assert isinstance(vector, GenericVector)
    assert vector.to_list() == [huge, 1]
    assert "out of float64 range" in caplog.text
