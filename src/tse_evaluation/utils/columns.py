"""
ColumnSet: the tabular input unit of the TSE engine.

A ColumnSet is an ordered collection of equal-length numeric columns. Callers
may hand the engine any of the usual in-memory tabular shapes; they are
normalised here into a float64 array of shape ``(n_rows, n_columns)`` plus a
tuple of column labels.

Accepted inputs
---------------
- ``pandas.DataFrame``: columns in frame order, labels from the frame.
- ``pandas.Series``: a single column, labelled by ``Series.name``.
- ``numpy.ndarray``: 1-D (one column) or 2-D laid out as rows x columns,
  i.e. the same orientation as ``DataFrame.to_numpy()``.
- ``Mapping[str, Sequence[float]]``: one entry per column, insertion order.
- ``Sequence[Sequence[float]]``: one inner sequence per column.
- ``Sequence[float]``: a single column.

Columns are paired across ColumnSets by position, never by label. Labels are
carried only for reporting.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from .validation import (
    DimensionMismatchError,
    InputValidationError,
    ensure_finite,
    ensure_non_empty,
)


@dataclass(frozen=True)
class ColumnSet:
    """
    Normalised ColumnSet.

    Fields
    ------
    values:
        float64 array of shape (n_rows, n_columns).
    labels:
        One label per column, in positional order.
    """

    values: np.ndarray
    labels: tuple[str, ...]

    @property
    def n_rows(self) -> int:
        return int(self.values.shape[0])

    @property
    def n_columns(self) -> int:
        return int(self.values.shape[1])


def _default_labels(prefix: str, n: int) -> tuple[str, ...]:
    return tuple(f"{prefix}{j + 1}" for j in range(n))


def _is_column(obj: Any) -> bool:
    return isinstance(obj, (Sequence, np.ndarray, pd.Series)) and not isinstance(
        obj, (str, bytes)
    )


def _to_float(data: Any, *, name: str, context: str | None) -> np.ndarray:
    # Strings are rejected even when they parse as numbers.
    prefix = f"[{context}] " if context is not None else ""
    try:
        arr = np.asarray(data)
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"{prefix}{name} must contain only numeric values.") from e

    if arr.dtype.kind not in "biuf":
        raise InputValidationError(
            f"{prefix}{name} must contain only numeric values; got dtype {arr.dtype}."
        )
    return arr.astype(float)


def _columns_from_sequences(
    columns: Sequence[Any],
    *,
    name: str,
    context: str | None,
) -> np.ndarray:
    prefix = f"[{context}] " if context is not None else ""
    scalars = [j for j, col in enumerate(columns) if not _is_column(col)]
    if scalars:
        raise InputValidationError(
            f"{prefix}{name} columns must be sequences of numbers; "
            f"column(s) at position {scalars} are scalars or strings."
        )

    lengths = {len(col) for col in columns}
    if len(lengths) > 1:
        raise DimensionMismatchError(
            f"{prefix}{name} columns have unequal lengths: {sorted(lengths)}."
        )
    cols = [_to_float(col, name=name, context=context) for col in columns]
    return np.column_stack(cols) if cols else np.empty((0, 0), dtype=float)


def as_column_set(
    data: Any,
    *,
    name: str = "ColumnSet",
    label_prefix: str = "V",
    context: str | None = None,
) -> ColumnSet:
    """
    Coerce a tabular input into a validated :class:`ColumnSet`.

    Parameters
    ----------
    data : DataFrame, Series, ndarray, mapping or sequence
        Input columns. See the module docstring for accepted layouts.

    name : str, default "ColumnSet"
        Name used in error messages (e.g. "Actual", "Survey").

    label_prefix : str, default "V"
        Prefix for generated labels when the input carries none.

    context : str, optional
        Optional context string to include in error messages.

    Returns
    -------
    ColumnSet

    Raises
    ------
    InputValidationError
        If the input is empty, non-numeric, contains NaN/inf, or is not
        1-D / 2-D.
    DimensionMismatchError
        If the input columns have unequal lengths.
    """
    if isinstance(data, ColumnSet):
        return data

    prefix = f"[{context}] " if context is not None else ""
    labels: tuple[str, ...] | None = None

    if isinstance(data, pd.DataFrame):
        labels = tuple(str(c) for c in data.columns)
        bad = [str(c) for c, dt in data.dtypes.items() if not pd.api.types.is_numeric_dtype(dt)]
        if bad:
            raise InputValidationError(
                f"{prefix}{name} must contain only numeric columns; non-numeric: {bad}."
            )
        values = _to_float(data.to_numpy(dtype=float, na_value=np.nan), name=name, context=context)
    elif isinstance(data, pd.Series):
        labels = (str(data.name),) if data.name is not None else None
        if not pd.api.types.is_numeric_dtype(data.dtype):
            raise InputValidationError(
                f"{prefix}{name} must contain only numeric values; got dtype {data.dtype}."
            )
        values = _to_float(data.to_numpy(dtype=float, na_value=np.nan), name=name, context=context)
    elif isinstance(data, np.ndarray):
        values = _to_float(data, name=name, context=context)
    elif isinstance(data, Mapping):
        labels = tuple(str(k) for k in data.keys())
        values = _columns_from_sequences(list(data.values()), name=name, context=context)
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        if any(_is_column(col) for col in data):
            values = _columns_from_sequences(list(data), name=name, context=context)
        else:
            values = _to_float(data, name=name, context=context)
    else:
        raise InputValidationError(
            f"{prefix}{name} has unsupported type "
            f"{type(data).__name__}."
        )

    if values.ndim == 1:
        values = values.reshape(-1, 1)
    elif values.ndim != 2:
        raise InputValidationError(
            f"{prefix}{name} must be 1-D or 2-D; "
            f"got {values.ndim} dimensions."
        )

    ensure_non_empty(values, name=name, context=context)
    ensure_finite(values, name=name, context=context)

    if labels is None or len(labels) != values.shape[1]:
        labels = _default_labels(label_prefix, values.shape[1])

    return ColumnSet(values=values, labels=labels)
