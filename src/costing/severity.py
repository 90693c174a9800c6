"""Severity bands for compute usage, proof size and message size.

Every classifier uses the same convention: values below ``lower`` fall in the
first band, values in ``[lower, upper]`` in the middle band, and values above
``upper`` are critical.
"""

from __future__ import annotations

from typing import TypeVar

from schemas.report import MessageSeverity, UsageSeverity

BandT = TypeVar("BandT", bound=str)

COMPUTE_USAGE_BOUNDS = (70.0, 90.0)
PROOF_SIZE_BOUNDS = (500, 1000)
MESSAGE_SIZE_BOUNDS = (1000, 1232)


def classify(value: float, lower: float, upper: float, bands: tuple[BandT, BandT, BandT]) -> BandT:
    if lower > upper:
        raise ValueError("lower bound must not exceed upper bound")
    low, middle, high = bands
    if value < lower:
        return low
    if value <= upper:
        return middle
    return high


def classify_compute_usage(consumed: int, budget: int) -> UsageSeverity:
    """Classify consumed/budget without float rounding at the boundaries."""
    if budget <= 0:
        return "critical" if consumed > 0 else "optimal"
    lower, upper = COMPUTE_USAGE_BOUNDS
    # Scale to integers: consumed * 100 compared against budget * percent.
    return classify(
        consumed * 100,
        lower * budget,
        upper * budget,
        ("optimal", "monitor", "critical"),
    )


def classify_proof_size(total_size: int) -> UsageSeverity:
    lower, upper = PROOF_SIZE_BOUNDS
    return classify(total_size, lower, upper, ("optimal", "monitor", "critical"))


def classify_message_size(message_size: int) -> MessageSeverity:
    lower, upper = MESSAGE_SIZE_BOUNDS
    return classify(message_size, lower, upper, ("safe", "warning", "critical"))


__all__ = [
    "COMPUTE_USAGE_BOUNDS",
    "MESSAGE_SIZE_BOUNDS",
    "PROOF_SIZE_BOUNDS",
    "classify",
    "classify_compute_usage",
    "classify_message_size",
    "classify_proof_size",
]
