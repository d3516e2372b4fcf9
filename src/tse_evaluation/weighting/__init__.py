"""
Weighting step: apply per-row weights to survey columns, one scheme at a time.
"""

from .schemes import (
    apply_weights,
    coerce_scheme,
    iter_schemes,
    neutral_weights,
    normalize_schemes,
    schemes_from_columns,
)

__all__ = [
    "apply_weights",
    "coerce_scheme",
    "iter_schemes",
    "neutral_weights",
    "normalize_schemes",
    "schemes_from_columns",
]
