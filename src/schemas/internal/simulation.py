"""Simulation request/result contracts exchanged with the RPC layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from core.config import DEFAULT_COMPUTE_UNIT_LIMIT

SimulationStatus = Literal["Success", "Failed"]


@dataclass(frozen=True)
class SimulationRequest:
    program_id: str
    proof: bytes
    public_witness: bytes
    compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT
    compute_unit_price: int = 0

    @property
    def instruction_data(self) -> bytes:
        return self.proof + self.public_witness


@dataclass(frozen=True)
class AccountStats:
    total_accounts: int
    num_required_signatures: int
    readonly_signed_accounts: int
    readonly_unsigned_accounts: int

    @property
    def writable_signed_accounts(self) -> int:
        return max(self.num_required_signatures - self.readonly_signed_accounts, 0)

    @property
    def writable_unsigned_accounts(self) -> int:
        unsigned = max(self.total_accounts - self.num_required_signatures, 0)
        return max(unsigned - self.readonly_unsigned_accounts, 0)


@dataclass(frozen=True)
class EnvelopeStats:
    """Sizes measured from the serialized transaction envelope."""

    transaction_size: int
    message_size: int
    num_signatures: int
    accounts: AccountStats


@dataclass(frozen=True)
class SimulationResult:
    status: SimulationStatus
    units_consumed: int
    logs: list[str] = field(default_factory=list)
    error: Any | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "Success"


@dataclass(frozen=True)
class FeeSample:
    slot: int
    prioritization_fee: int


__all__ = [
    "AccountStats",
    "EnvelopeStats",
    "FeeSample",
    "SimulationRequest",
    "SimulationResult",
    "SimulationStatus",
]
