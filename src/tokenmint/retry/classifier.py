"""Failure classification for compute-price retries.

Decides whether a failed transaction is worth resubmitting with a
different compute unit price:
- transient: blockhash expiry, confirmation timeouts, fee/compute issues, RPC hiccups
- fatal: everything else (bad arguments, rent shortfalls, missing accounts)
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class FailureClass(str, Enum):
    """Classification of a failed command."""

    TRANSIENT = "transient"  # Resubmit, possibly with a higher fee
    FATAL = "fatal"  # Propagate as-is


class ClassificationResult(NamedTuple):
    """Result of failure classification."""

    failure_class: FailureClass
    marker: str | None
    reason: str


# Each entry is (lower-case substring, reason). Matching is case-insensitive
# substring search over the whole failure text.
TRANSIENT_MARKERS: list[tuple[str, str]] = [
    ("blockhashnotfound", "Blockhash not found"),
    ("blockhash not found", "Blockhash not found"),
    ("unable to confirm transaction", "Transaction not confirmed in time"),
    ("transaction expired", "Transaction expired"),
    ("compute unit", "Compute unit limit or price"),
    ("gas", "Fee too low"),
    ("insufficient fee-payer funds", "Fee payer cannot cover fees"),
    ("rpc error", "RPC node error"),
]


def classify_failure(error_text: str) -> ClassificationResult:
    """Classify a failure's captured error text.

    Args:
        error_text: stderr and/or message from the failed command.

    Returns:
        ClassificationResult naming the first matching marker, or FATAL.
    """
    if not error_text:
        return ClassificationResult(
            failure_class=FailureClass.FATAL,
            marker=None,
            reason="Empty error output",
        )

    normalized = error_text.lower()

    for marker, reason in TRANSIENT_MARKERS:
        if marker in normalized:
            return ClassificationResult(
                failure_class=FailureClass.TRANSIENT,
                marker=marker,
                reason=reason,
            )

    return ClassificationResult(
        failure_class=FailureClass.FATAL,
        marker=None,
        reason="No transient marker found",
    )


def is_transient(error_text: str) -> bool:
    """Quick check if a failure should be retried."""
    return classify_failure(error_text).failure_class == FailureClass.TRANSIENT
