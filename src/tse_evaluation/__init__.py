"""
TSE Evaluation Toolkit

This package computes averaged Total Survey Error (TSE) metrics comparing a
reference ("gold standard") dataset against a survey, unweighted and under
any number of weighting schemes. Scale-dependent metrics (aMAE, aMSE with
bias/variance decomposition, aRMSE, aMSLE, aRMSLE) and scale-independent
metrics (aMAPE, aSMAPE, aRAE, aRSE, aRRSE) are supported.
"""

from .dataframe import evaluate_tse_df
from .datasets import load_testwgt
from .engine import EngineOptions, compute_metrics
from .metrics import MetricKind, MetricSet, get_metric_set, list_metric_sets
from .operations import (
    OPERATIONS,
    ave_mae,
    ave_mape,
    ave_msle,
    ave_mse,
    ave_rae,
    ave_rmse,
    ave_rmsle,
    ave_rrse,
    ave_rse,
    ave_smape,
    full_scale_dependent,
    full_scale_independent,
    run_metric_set,
)
from .report import MetricResult, ResultTable
from .utils import (
    DecompositionError,
    DimensionMismatchError,
    DivisionByZeroError,
    DomainError,
    InputValidationError,
    TSEError,
)
from .weighting import apply_weights, schemes_from_columns

__all__ = [
    "evaluate_tse_df",
    "load_testwgt",
    "EngineOptions",
    "compute_metrics",
    "MetricKind",
    "MetricSet",
    "get_metric_set",
    "list_metric_sets",
    "OPERATIONS",
    "ave_mae",
    "ave_mse",
    "ave_rmse",
    "ave_msle",
    "ave_rmsle",
    "full_scale_dependent",
    "ave_mape",
    "ave_smape",
    "ave_rae",
    "ave_rse",
    "ave_rrse",
    "full_scale_independent",
    "run_metric_set",
    "MetricResult",
    "ResultTable",
    "TSEError",
    "InputValidationError",
    "DimensionMismatchError",
    "DomainError",
    "DivisionByZeroError",
    "DecompositionError",
    "apply_weights",
    "schemes_from_columns",
]
