"""Compute, size and fee metrics derived from simulation results."""

from .model import (
    BASE_FEE_LAMPORTS,
    LAMPORTS_PER_SOL,
    MAX_COMPUTE_UNITS,
    MAX_MESSAGE_SIZE,
    FeeBreakdown,
    compute_fees,
    cu_per_proof_size,
    message_within_size,
    percentage_of_compute_budget_used,
    total_proof_witness_size,
)
from .severity import classify_compute_usage, classify_message_size, classify_proof_size

__all__ = [
    "BASE_FEE_LAMPORTS",
    "FeeBreakdown",
    "LAMPORTS_PER_SOL",
    "MAX_COMPUTE_UNITS",
    "MAX_MESSAGE_SIZE",
    "classify_compute_usage",
    "classify_message_size",
    "classify_proof_size",
    "compute_fees",
    "cu_per_proof_size",
    "message_within_size",
    "percentage_of_compute_budget_used",
    "total_proof_witness_size",
]
