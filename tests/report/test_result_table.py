"""
Tests for ResultTable rendering (report/table.py).

We do NOT re-test metric values here; only formatting, labels and the aMSE
separator columns are checked.
"""

from __future__ import annotations

import numpy as np
import pytest

from tse_evaluation import compute_metrics
from tse_evaluation.report import ResultTable, format_value

ACTUAL = {"A1": [1.0, 2.0, 3.0], "A2": [4.0, 5.0, 6.0]}
SURVEY = {"Q1": [1.0, 1.0, 3.0], "Q2": [4.0, 6.0, 6.0]}


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.0 / 3.0, "0.3333333"),
        (4.0 / 3.0, "1.333333"),
        (0.5, "0.5"),
        (1234567.89, "1234568"),
        (1e-9 / 3.0, "3.333333e-10"),
        (float("inf"), "inf"),
    ],
)
def test_format_value_uses_seven_significant_digits(value, expected) -> None:
    assert format_value(value) == expected


def test_table_renders_rows_and_plain_columns() -> None:
    result = compute_metrics(ACTUAL, SURVEY, [[2.0, 2.0, 2.0]], metrics="avemae")

    table = ResultTable.from_result(result)

    assert table.row_labels == ("unweighted", "weighting scheme 1")
    assert table.column_labels == ("aMAE",)
    assert table.cell("unweighted", "aMAE") == "0.3333333"
    assert table.cell(1, "aMAE") == "3.5"


def test_mse_renders_as_decomposition_with_separators() -> None:
    result = compute_metrics(ACTUAL, SURVEY, metrics="avemse")

    table = ResultTable.from_result(result)

    assert table.column_labels == ("aMSE", "=>", "aBias^2", "+", "aVar")
    assert table.cells[0] == ("0.3333333", "=>", "0.1111111", "+", "0.2222222")


def test_full_scale_dependent_column_order() -> None:
    result = compute_metrics(ACTUAL, SURVEY, metrics="full_scale_dependent")

    table = ResultTable.from_result(result)

    assert table.column_labels == (
        "aMAE",
        "aMSE",
        "=>",
        "aBias^2",
        "+",
        "aVar",
        "aRMSE",
        "aMSLE",
        "aRMSLE",
    )


def test_formatting_does_not_alter_numeric_result() -> None:
    result = compute_metrics(ACTUAL, SURVEY, metrics="avemse")
    before = {k: v.copy() for k, v in result.values.items()}

    table = ResultTable.from_result(result, digits=3)

    assert table.cell(0, "aMSE") == "0.333"
    assert table.result is result
    for k, v in before.items():
        np.testing.assert_array_equal(result.values[k], v)


def test_to_frame_and_string_rendering() -> None:
    result = compute_metrics(ACTUAL, SURVEY, [[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]], metrics="averse")
    table = ResultTable.from_result(result)

    df = table.to_frame()
    text = str(table)

    assert df.shape == (3, 1)
    assert df.loc["weighting scheme 2", "aRSE"] == table.cell(2, "aRSE")
    assert "weighting scheme 2" in text
    assert "aRSE" in text


def test_table_is_immutable() -> None:
    table = ResultTable.from_result(compute_metrics(ACTUAL, SURVEY, metrics="avemae"))

    with pytest.raises(AttributeError):
        table.cells = ()  # type: ignore[misc]
