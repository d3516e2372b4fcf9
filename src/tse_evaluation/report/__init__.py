"""
Result containers (numeric) and result tables (presentation).
"""

from .results import (
    UNWEIGHTED_LABEL,
    MetricResult,
    SchemeEvaluation,
    scheme_label,
    statistic_labels,
)
from .table import SIGNIFICANT_DIGITS, ResultTable, format_value

__all__ = [
    "UNWEIGHTED_LABEL",
    "MetricResult",
    "SchemeEvaluation",
    "scheme_label",
    "statistic_labels",
    "SIGNIFICANT_DIGITS",
    "ResultTable",
    "format_value",
]
