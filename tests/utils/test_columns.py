"""
Unit tests for ColumnSet normalisation (utils/columns.py).

We do NOT re-test the ensure_* primitives here (see test_validation.py); these
tests focus on input layouts, labels and type rejection.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tse_evaluation.utils import (
    ColumnSet,
    DimensionMismatchError,
    InputValidationError,
    as_column_set,
)


def test_dataframe_keeps_column_order_and_labels() -> None:
    df = pd.DataFrame({"A2": [4, 5, 6], "A1": [1, 2, 3]})

    cs = as_column_set(df, name="Actual")

    assert cs.labels == ("A2", "A1")
    assert cs.values.shape == (3, 2)
    assert cs.values.dtype == float
    np.testing.assert_array_equal(cs.values[:, 0], [4.0, 5.0, 6.0])


def test_mapping_and_nested_sequences_are_columns() -> None:
    from_mapping = as_column_set({"A1": [1, 2, 3], "A2": [4, 5, 6]})
    from_lists = as_column_set([[1, 2, 3], [4, 5, 6]], label_prefix="A")

    assert from_mapping.labels == ("A1", "A2")
    assert from_lists.labels == ("A1", "A2")
    np.testing.assert_array_equal(from_mapping.values, from_lists.values)
    assert from_lists.n_rows == 3
    assert from_lists.n_columns == 2


def test_ndarray_is_rows_by_columns() -> None:
    arr = np.array([[1.0, 4.0], [2.0, 5.0], [3.0, 6.0]])

    cs = as_column_set(arr, label_prefix="Q")

    assert cs.n_rows == 3
    assert cs.n_columns == 2
    assert cs.labels == ("Q1", "Q2")


def test_one_dimensional_inputs_become_a_single_column() -> None:
    s = pd.Series([1.0, 2.0, 3.0], name="Q1")

    assert as_column_set(s).labels == ("Q1",)
    assert as_column_set([1, 2, 3]).values.shape == (3, 1)
    assert as_column_set(np.array([1, 2, 3])).values.shape == (3, 1)


def test_column_set_passes_through_unchanged() -> None:
    cs = as_column_set({"x": [1, 2]})

    assert as_column_set(cs) is cs


def test_unequal_column_lengths_raise_dimension_mismatch() -> None:
    with pytest.raises(DimensionMismatchError) as excinfo:
        as_column_set({"a": [1, 2, 3], "b": [1, 2]}, name="Survey")

    assert "unequal lengths" in str(excinfo.value)


@pytest.mark.parametrize(
    "bad",
    [
        [],
        pd.DataFrame({"a": []}),
        {"a": [1.0, float("nan")]},
        [1.0, float("inf")],
        pd.DataFrame({"a": ["x", "y"]}),
        np.zeros((2, 2, 2)),
        42,
    ],
)
def test_invalid_inputs_raise_input_validation_error(bad) -> None:
    with pytest.raises(InputValidationError):
        as_column_set(bad, name="Actual", context="test")


def test_column_set_is_frozen() -> None:
    cs = ColumnSet(values=np.ones((2, 1)), labels=("x",))

    with pytest.raises(AttributeError):
        cs.labels = ("y",)  # type: ignore[misc]


@pytest.mark.parametrize(
    "bad",
    [
        {"A1": 1.0},
        {"A1": [1.0, 2.0], "A2": 3.0},
        [[1.0, 2.0], "ab"],
    ],
)
def test_scalar_columns_raise_input_validation_error(bad) -> None:
    with pytest.raises(InputValidationError, match="position"):
        as_column_set(bad, name="Actual")


@pytest.mark.parametrize(
    "bad",
    [
        pd.DataFrame({"A": ["1", "2", "3"]}),
        pd.Series(["1", "2"], name="Q1"),
        ["1", "2"],
        {"A1": ["1", "2"]},
        np.array(["1.5", "2.5"]),
    ],
)
def test_numeric_strings_are_not_coerced(bad) -> None:
    with pytest.raises(InputValidationError, match="numeric"):
        as_column_set(bad, name="Actual")


def test_non_numeric_dataframe_columns_are_named() -> None:
    df = pd.DataFrame({"A1": [1.0, 2.0], "A2": ["x", "y"]})

    with pytest.raises(InputValidationError) as excinfo:
        as_column_set(df, name="Actual", context="load")

    msg = str(excinfo.value)
    assert msg.startswith("[load] Actual")
    assert "A2" in msg
    assert "A1" not in msg.split("non-numeric")[1]


def test_boolean_and_integer_columns_are_numeric() -> None:
    df = pd.DataFrame({"flag": [True, False], "count": [3, 4]})

    cs = as_column_set(df)

    np.testing.assert_array_equal(cs.values, [[1.0, 3.0], [0.0, 4.0]])
