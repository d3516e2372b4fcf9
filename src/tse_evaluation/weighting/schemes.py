"""
Weighting step for Total Survey Error evaluation.

A weighting scheme scales the survey columns elementwise (one weight value per
row). Scheme 0 is always the unweighted baseline, modelled as an all-ones
scheme of the survey's shape, so the baseline runs through the exact same
formula pipeline as every user-supplied scheme.

Scheme layouts
--------------
- 2-D (DataFrame, 2-D array, mapping, sequence of columns): one weight column
  per survey column, paired by position. The column count must match.
- 1-D (Series, 1-D array, flat sequence of numbers): a single weight column
  applied to every survey column.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from numbers import Real
from typing import Any

import numpy as np
import pandas as pd

from ..utils.columns import ColumnSet, as_column_set
from ..utils.validation import DimensionMismatchError, ensure_same_shape


def neutral_weights(survey: ColumnSet) -> np.ndarray:
    """All-ones weights with the survey's shape (the unweighted baseline)."""
    return np.ones_like(survey.values)


def apply_weights(
    survey: np.ndarray,
    weights: np.ndarray,
    *,
    context: str | None = None,
) -> np.ndarray:
    """
    Return the weighted survey ``survey * weights`` (elementwise).

    Parameters
    ----------
    survey : numpy.ndarray of shape (n_rows, n_columns)
        Survey values.

    weights : numpy.ndarray of shape (n_rows, n_columns)
        Weight values, column j scaling survey column j.

    context : str, optional
        Optional context string to include in error messages.

    Raises
    ------
    DimensionMismatchError
        If ``weights`` and ``survey`` differ in column or row count.
    """
    ensure_same_shape(weights, survey, names=("Weights", "Survey"), context=context)
    return survey * weights


def _is_one_dimensional(scheme: Any) -> bool:
    if isinstance(scheme, pd.Series):
        return True
    if isinstance(scheme, np.ndarray):
        return scheme.ndim == 1
    if isinstance(scheme, (pd.DataFrame, Mapping, ColumnSet)):
        return False
    if isinstance(scheme, Sequence) and not isinstance(scheme, (str, bytes)):
        return all(isinstance(v, (Real, np.number)) for v in scheme)
    return False


def coerce_scheme(
    scheme: Any,
    survey: ColumnSet,
    *,
    index: int,
    context: str | None = None,
) -> np.ndarray:
    """
    Normalise one weighting scheme into an array shaped like ``survey``.

    Parameters
    ----------
    scheme : array-like
        A 1-D weight column (broadcast to every survey column) or a 2-D
        ColumnSet with one weight column per survey column.

    survey : ColumnSet
        The survey ColumnSet the scheme will be applied to.

    index : int
        1-based scheme number, used in error messages.

    context : str, optional
        Optional context string to include in error messages.

    Returns
    -------
    numpy.ndarray of shape (survey.n_rows, survey.n_columns)

    Raises
    ------
    DimensionMismatchError
        If the scheme's row count differs from the survey's, or a 2-D scheme
        has a different column count.
    """
    name = f"Weights[{index}]"
    cs = as_column_set(scheme, name=name, label_prefix="W", context=context)

    if _is_one_dimensional(scheme):
        if cs.n_rows != survey.n_rows:
            prefix = f"[{context}] " if context is not None else ""
            raise DimensionMismatchError(
                f"{prefix}Row count mismatch: {name} has {cs.n_rows} rows but "
                f"Survey has {survey.n_rows} rows."
            )
        return np.repeat(cs.values, survey.n_columns, axis=1)

    ensure_same_shape(cs.values, survey.values, names=(name, "Survey"), context=context)
    return cs.values


def normalize_schemes(
    weights: Any,
    survey: ColumnSet,
    *,
    context: str | None = None,
) -> list[np.ndarray]:
    """
    Validate and normalise the ordered collection of weighting schemes.

    ``None`` and an empty sequence both mean "no schemes". A bare DataFrame or
    array is rejected because it is ambiguous between "one 2-D scheme" and
    "one scheme per column"; wrap it in a list, or split it with
    :func:`schemes_from_columns`.

    Returns
    -------
    list of numpy.ndarray
        One array per scheme, in input order, each shaped like ``survey``.

    Raises
    ------
    TypeError
        If ``weights`` is not a list/tuple of schemes.
    """
    if weights is None:
        return []

    ambiguous = (pd.DataFrame, pd.Series, np.ndarray, Mapping, str, bytes)
    if isinstance(weights, ambiguous) or not isinstance(weights, Sequence):
        raise TypeError(
            "`weights` must be a list or tuple of weighting schemes, got "
            f"{type(weights).__name__}. Use schemes_from_columns(df) to treat each "
            "DataFrame column as its own scheme."
        )

    if any(isinstance(w, (Real, np.number)) for w in weights):
        raise TypeError(
            "`weights` must be a sequence of schemes, not a flat sequence of numbers. "
            "Wrap a single weight column in a list: weights=[w]."
        )

    return [
        coerce_scheme(scheme, survey, index=k, context=context)
        for k, scheme in enumerate(weights, start=1)
    ]


def iter_schemes(
    survey: ColumnSet,
    schemes: Sequence[np.ndarray],
) -> Iterator[tuple[int, np.ndarray]]:
    """
    Yield ``(scheme_index, weights)`` pairs, neutral weights first.

    Scheme 0 is the unweighted baseline; schemes 1..K follow input order.
    """
    yield 0, neutral_weights(survey)
    for k, w in enumerate(schemes, start=1):
        yield k, w


def schemes_from_columns(
    df: pd.DataFrame,
    columns: Sequence[str] | None = None,
) -> list[pd.Series]:
    """
    Split a DataFrame into one 1-D weighting scheme per column.

    This reproduces the ``Weights=data.frame(W1, W2)`` convention in which
    each weight column is a scheme applied to every survey column.

    Parameters
    ----------
    df : pandas.DataFrame
        Frame holding weight columns.

    columns : sequence of str, optional
        Columns to use, in scheme order. Defaults to all columns of ``df``.

    Raises
    ------
    KeyError
        If a requested column is not in ``df``.
    """
    cols = list(df.columns) if columns is None else list(columns)
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Missing weight columns in df: {missing}")
    return [df[c] for c in cols]
