"""Compute-price retry system for tokenmint.

This module provides:
- Failure classification (transient vs fatal)
- The adaptive retry executor that re-prices failed transactions
"""

from .classifier import FailureClass, classify_failure, is_transient
from .executor import (
    COMPUTE_PRICE_PLACEHOLDER,
    DEFAULT_INITIAL_PRICE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PRICE_STEP,
    AdaptiveRetryExecutor,
    ExecutorState,
    OperatorDecision,
    parse_operator_reply,
    substitute_compute_price,
)

__all__ = [
    # Classifier
    "FailureClass",
    "classify_failure",
    "is_transient",
    # Executor
    "AdaptiveRetryExecutor",
    "ExecutorState",
    "OperatorDecision",
    "parse_operator_reply",
    "substitute_compute_price",
    "COMPUTE_PRICE_PLACEHOLDER",
    "DEFAULT_INITIAL_PRICE",
    "DEFAULT_PRICE_STEP",
    "DEFAULT_MAX_RETRIES",
]
