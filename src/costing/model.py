"""Pure cost functions over already-gathered simulation inputs."""

from __future__ import annotations

from dataclasses import dataclass

from schemas.report import UsageSeverity

LAMPORTS_PER_SIGNATURE = 5_000
BASE_FEE_LAMPORTS = LAMPORTS_PER_SIGNATURE
LAMPORTS_PER_SOL = 1_000_000_000
MICROLAMPORTS_PER_LAMPORT = 1_000_000
MAX_COMPUTE_UNITS = 1_400_000
MAX_MESSAGE_SIZE = 1232


def total_proof_witness_size(proof_size: int, witness_size: int) -> int:
    if proof_size < 0 or witness_size < 0:
        raise ValueError("sizes must be non-negative")
    return proof_size + witness_size


def percentage_of_compute_budget_used(consumed: int, budget: int) -> float:
    if budget <= 0:
        return 0.0
    return consumed / budget * 100.0


def cu_per_proof_size(consumed: int, total_size: int) -> float:
    if total_size <= 0:
        return 0.0
    return consumed / total_size


def prioritization_fee(cu_limit: int, cu_price_microlamports: int) -> int:
    """Priority fee in lamports; the price is expressed per compute unit in microlamports."""
    return cu_limit * cu_price_microlamports // MICROLAMPORTS_PER_LAMPORT


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


def message_within_size(message_size: int) -> bool:
    return message_size <= MAX_MESSAGE_SIZE


def compute_limit_warning(cu_limit: int) -> str | None:
    if cu_limit > MAX_COMPUTE_UNITS:
        return f"CU limit ({cu_limit:,}) exceeds maximum allowed ({MAX_COMPUTE_UNITS:,})"
    return None


@dataclass(frozen=True)
class FeeBreakdown:
    base_fee: int
    prioritization_fee: int
    cu_limit: int
    cu_price_microlamports: int
    num_signatures: int = 1

    @property
    def total_fee(self) -> int:
        return self.base_fee + self.prioritization_fee

    @property
    def cost_in_sol(self) -> float:
        return lamports_to_sol(self.total_fee)

    @property
    def priority(self) -> float:
        if self.cu_limit <= 0:
            return 0.0
        return self.prioritization_fee / self.cu_limit


def compute_fees(cu_limit: int, cu_price_microlamports: int) -> FeeBreakdown:
    """Fee breakdown for the single-signer verification transaction.

    The base fee is the same on every network.
    """
    return FeeBreakdown(
        base_fee=BASE_FEE_LAMPORTS,
        prioritization_fee=prioritization_fee(cu_limit, cu_price_microlamports),
        cu_limit=cu_limit,
        cu_price_microlamports=cu_price_microlamports,
    )


def compute_suggestion(severity: UsageSeverity, limit_warning: str | None) -> str:
    if limit_warning:
        return limit_warning
    if severity == "critical":
        return "Consider optimizing compute usage - near budget limit"
    if severity == "monitor":
        return "Monitor compute usage - approaching budget limit"
    return "Compute usage is within acceptable range"


def size_suggestion(message_size: int) -> str:
    if message_within_size(message_size):
        return f"Transaction size ({message_size}) is within limits"
    return f"Transaction size ({message_size}) exceeds maximum ({MAX_MESSAGE_SIZE})"


def fee_suggestion(fees: FeeBreakdown) -> str:
    if fees.prioritization_fee == 0:
        return "Consider adding priority fee for faster confirmation"
    return "Priority fee is set"


__all__ = [
    "BASE_FEE_LAMPORTS",
    "FeeBreakdown",
    "LAMPORTS_PER_SIGNATURE",
    "LAMPORTS_PER_SOL",
    "MAX_COMPUTE_UNITS",
    "MAX_MESSAGE_SIZE",
    "compute_fees",
    "compute_limit_warning",
    "compute_suggestion",
    "cu_per_proof_size",
    "fee_suggestion",
    "lamports_to_sol",
    "message_within_size",
    "percentage_of_compute_budget_used",
    "prioritization_fee",
    "size_suggestion",
    "total_proof_witness_size",
]
