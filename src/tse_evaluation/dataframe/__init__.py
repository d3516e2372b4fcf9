"""
Pandas / DataFrame utilities for evaluating surveys against a reference
with averaged TSE metrics.
"""

from .tse import evaluate_tse_df

__all__ = [
    "evaluate_tse_df",
]
