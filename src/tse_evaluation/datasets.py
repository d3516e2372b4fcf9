"""
Example data.

``TESTWGT`` is a small synthetic dataset laid out as one wide table:

- ``A1``, ``A2``: reference ("gold standard") variables,
- ``Q1``, ``Q2``: the corresponding survey variables,
- ``W1``, ``W2``: two weighting schemes, each applied to every survey column.
"""

from __future__ import annotations

from typing import Final

import pandas as pd

ACTUAL_COLUMNS: Final[tuple[str, ...]] = ("A1", "A2")
SURVEY_COLUMNS: Final[tuple[str, ...]] = ("Q1", "Q2")
WEIGHT_COLUMNS: Final[tuple[str, ...]] = ("W1", "W2")

_TESTWGT: Final[dict[str, list[float]]] = {
    "A1": [12.0, 15.0, 9.0, 20.0, 18.0, 11.0, 14.0, 16.0, 10.0, 13.0],
    "A2": [3.2, 4.1, 2.8, 5.0, 4.6, 3.5, 3.9, 4.4, 3.0, 3.7],
    "Q1": [11.0, 16.0, 8.0, 22.0, 17.0, 12.0, 13.0, 18.0, 9.0, 14.0],
    "Q2": [3.0, 4.5, 2.5, 5.3, 4.2, 3.8, 3.6, 4.9, 2.7, 4.0],
    "W1": [1.05, 0.95, 1.10, 0.90, 1.02, 0.98, 1.04, 0.92, 1.08, 0.97],
    "W2": [0.80, 1.20, 1.00, 0.90, 1.10, 1.00, 0.95, 1.05, 1.15, 0.85],
}


def load_testwgt() -> pd.DataFrame:
    """Return a fresh copy of the ``TESTWGT`` example DataFrame."""
    return pd.DataFrame({k: list(v) for k, v in _TESTWGT.items()})
