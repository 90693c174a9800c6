"""Persisted cost report contract (``.zklense/report.json``).

The viewer front-end reads this document verbatim, so field names are part of
the public schema. Bump ``REPORT_SCHEMA_VERSION`` on any incompatible change.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt, model_validator

from schemas.project import SolanaNetwork

REPORT_SCHEMA_VERSION = 1

UsageSeverity = Literal["optimal", "monitor", "critical"]
MessageSeverity = Literal["safe", "warning", "critical"]


class ComputeUnitsSection(BaseModel):
    total_compute_units_consumed: NonNegativeInt
    compute_budget: NonNegativeInt
    max_compute_units: NonNegativeInt
    percentage_of_compute_budget_used: NonNegativeFloat
    severity: UsageSeverity
    warning: Optional[str] = None
    suggestion: str

    model_config = ConfigDict(extra="forbid")


class ProofSection(BaseModel):
    proof_size: NonNegativeInt
    witness_size: NonNegativeInt
    total_proof_witness_size: NonNegativeInt
    cu_per_proof_size: NonNegativeFloat
    severity: UsageSeverity

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_total(self) -> "ProofSection":
        if self.total_proof_witness_size != self.proof_size + self.witness_size:
            raise ValueError("total_proof_witness_size must equal proof_size + witness_size")
        return self


class CostSection(BaseModel):
    cost_in_sol: NonNegativeFloat
    cost_in_lamports: NonNegativeInt
    base_fee_per_signature: NonNegativeInt
    num_signatures: NonNegativeInt
    base_fee: NonNegativeInt
    cu_limit: NonNegativeInt
    cu_price_microlamports: NonNegativeInt
    prioritization_fee: NonNegativeInt
    total_fee: NonNegativeInt
    priority: NonNegativeFloat
    suggestion: str

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_total(self) -> "CostSection":
        if self.total_fee != self.base_fee + self.prioritization_fee:
            raise ValueError("total_fee must equal base_fee + prioritization_fee")
        return self


class TransactionStatusSection(BaseModel):
    status: Literal["Success", "Failed"]
    error: Optional[str] = None
    suggestion: str

    model_config = ConfigDict(extra="forbid")


class TransactionSizeSection(BaseModel):
    transaction_size: NonNegativeInt
    message_size: NonNegativeInt
    max_message_size: NonNegativeInt
    message_within_size: bool
    severity: MessageSeverity
    message: str
    suggestion: str

    model_config = ConfigDict(extra="forbid")


class TransactionLogsSection(BaseModel):
    logs: List[str] = Field(default_factory=list)
    log_count: NonNegativeInt = 0

    model_config = ConfigDict(extra="forbid")


class AccountsSection(BaseModel):
    total_accounts: NonNegativeInt
    writable_signed_accounts: NonNegativeInt
    writable_unsigned_accounts: NonNegativeInt
    total_writable_accounts: NonNegativeInt
    readonly_signed_accounts: NonNegativeInt
    readonly_unsigned_accounts: NonNegativeInt

    model_config = ConfigDict(extra="forbid")


class FeeSampleEntry(BaseModel):
    slot: NonNegativeInt
    prioritization_fee: NonNegativeInt

    model_config = ConfigDict(extra="forbid")


class EnvironmentSection(BaseModel):
    network: SolanaNetwork
    rpc_url: str
    custom_rpc: bool = False

    model_config = ConfigDict(extra="forbid")


class CostReport(BaseModel):
    schema_version: int = REPORT_SCHEMA_VERSION
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    program_id: str
    compute_units: ComputeUnitsSection
    proof: ProofSection
    cost: CostSection
    transaction_status: TransactionStatusSection
    transaction_size: TransactionSizeSection
    transaction_logs: TransactionLogsSection
    accounts: AccountsSection
    recent_prioritization_fees: List[FeeSampleEntry] = Field(default_factory=list, max_length=50)
    environment: EnvironmentSection

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "AccountsSection",
    "ComputeUnitsSection",
    "CostReport",
    "CostSection",
    "EnvironmentSection",
    "FeeSampleEntry",
    "MessageSeverity",
    "ProofSection",
    "REPORT_SCHEMA_VERSION",
    "TransactionLogsSection",
    "TransactionSizeSection",
    "TransactionStatusSection",
    "UsageSeverity",
]
