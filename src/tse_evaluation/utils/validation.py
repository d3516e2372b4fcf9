from __future__ import annotations

from typing import Sequence

import numpy as np


class TSEError(ValueError):
    """
    Base error for Total Survey Error computations.

    This is a thin wrapper around ValueError so callers can catch a more
    specific exception type if they want to distinguish TSE failures from
    other ValueErrors.
    """


class InputValidationError(TSEError):
    """
    Error raised when an input ColumnSet is empty, non-numeric, contains
    NaN / infinite values, or has an unsupported shape.
    """


class DimensionMismatchError(TSEError):
    """
    Error raised when column or row counts disagree between Actual, Survey
    and a weighting scheme.
    """


class DomainError(TSEError):
    """
    Error raised when a logarithmic metric (aMSLE, aRMSLE) would take the log
    of a non-positive quantity.
    """


class DivisionByZeroError(TSEError, ZeroDivisionError):
    """
    Error raised when a relative metric (aMAPE, aRAE, aRSE, aRRSE) hits a zero
    denominator.

    Also a ZeroDivisionError, so arithmetic-minded callers can catch it the
    usual way.
    """


class DecompositionError(TSEError):
    """
    Error raised when the per-column identity MSE = Bias^2 + Var does not hold
    numerically.
    """


def _prefix(context: str | None) -> str:
    return f"[{context}] " if context is not None else ""


def ensure_finite(
    values: np.ndarray,
    *,
    name: str = "array",
    context: str | None = None,
) -> None:
    """
    Ensure an array contains neither NaN nor infinite values.

    Parameters
    ----------
    values : numpy.ndarray
        Array to validate.

    name : str
        Name used in error messages.

    context : str, optional
        Optional context string to include in the error message
        (e.g. the name of the calling function).

    Raises
    ------
    InputValidationError
        If any element is NaN or infinite.
    """
    if np.isfinite(values).all():
        return

    raise InputValidationError(f"{_prefix(context)}{name} contains NaN or infinite values.")


def ensure_non_empty(
    values: np.ndarray,
    *,
    name: str = "array",
    context: str | None = None,
) -> None:
    """
    Ensure a 2-D (rows x columns) array has at least one row and one column.

    Raises
    ------
    InputValidationError
        If the array has zero rows or zero columns.
    """
    n_rows, n_cols = values.shape
    if n_rows == 0 or n_cols == 0:
        raise InputValidationError(
            f"{_prefix(context)}{name} is empty (shape {n_rows} rows x {n_cols} columns)."
        )


def ensure_same_shape(
    left: np.ndarray,
    right: np.ndarray,
    *,
    names: Sequence[str] = ("left", "right"),
    context: str | None = None,
) -> None:
    """
    Ensure two 2-D (rows x columns) arrays have identical shapes.

    Column counts are checked first so the message names the more
    fundamental problem when both counts disagree.

    Raises
    ------
    DimensionMismatchError
        If the column counts or the row counts differ.
    """
    name_l, name_r = names
    if left.shape[1] != right.shape[1]:
        raise DimensionMismatchError(
            f"{_prefix(context)}Column count mismatch: {name_l} has {left.shape[1]} "
            f"columns but {name_r} has {right.shape[1]} columns."
        )
    if left.shape[0] != right.shape[0]:
        raise DimensionMismatchError(
            f"{_prefix(context)}Row count mismatch: {name_l} has {left.shape[0]} "
            f"rows but {name_r} has {right.shape[0]} rows."
        )
