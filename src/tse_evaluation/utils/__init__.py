"""
Utility helpers for the tse-evaluation package.

Currently includes:
    - the TSE error taxonomy and array validation checks
    - ColumnSet normalisation
"""

from .columns import ColumnSet, as_column_set
from .validation import (
    DecompositionError,
    DimensionMismatchError,
    DivisionByZeroError,
    DomainError,
    InputValidationError,
    TSEError,
    ensure_finite,
    ensure_non_empty,
    ensure_same_shape,
)

__all__ = [
    "ColumnSet",
    "as_column_set",
    "TSEError",
    "InputValidationError",
    "DimensionMismatchError",
    "DomainError",
    "DivisionByZeroError",
    "DecompositionError",
    "ensure_finite",
    "ensure_non_empty",
    "ensure_same_shape",
]
